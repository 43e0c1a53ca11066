"""Helix trajectory model for a charged particle in a solenoidal field.

Units follow the detector convention: positions in mm, momenta in GeV and
the field in Tesla. The helix is parameterized by the turning angle
`alpha` measured from the reference point along the direction of motion:

    x(alpha) = x_c + R * cos(phi_ref - s * alpha)
    y(alpha) = y_c + R * sin(phi_ref - s * alpha)
    z(alpha) = z_ref + R * alpha * tan(lambda)

where `s = sign(q * B)` is the bending sense and `phi_ref` the azimuth of
the reference point seen from the circle centre.
"""

from __future__ import annotations

import math

from .models import CartesianVector

# Conversion factor: pT [GeV] = FCT * |q| * B [T] * R [mm]
FCT = 2.99792458e-4


class Helix:
    """Helix built from a position, momentum, charge and field value."""

    def __init__(
        self,
        position: CartesianVector,
        momentum: CartesianVector,
        charge: float,
        b_field: float,
    ) -> None:
        if charge == 0:
            raise ValueError("Helix requires a charged particle.")
        if b_field == 0.0:
            raise ValueError("Helix requires a non-zero magnetic field.")
        pxy = math.hypot(momentum.x, momentum.y)
        if pxy == 0.0:
            raise ValueError("Helix requires non-zero transverse momentum.")

        self._reference_point = position
        self._momentum = momentum
        self._charge = float(charge)
        self._b_field = float(b_field)
        self._pxy = pxy
        self._sign = 1 if charge * b_field > 0 else -1
        self._radius = pxy / (FCT * abs(charge * b_field))
        self._tan_lambda = momentum.z / pxy
        self._phi0 = math.atan2(momentum.y, momentum.x)
        # Centre lies a quarter turn from the momentum azimuth, on the bending side.
        phi_centre = self._phi0 - self._sign * 0.5 * math.pi
        self._x_centre = position.x + self._radius * math.cos(phi_centre)
        self._y_centre = position.y + self._radius * math.sin(phi_centre)
        self._phi_ref = math.atan2(position.y - self._y_centre, position.x - self._x_centre)

    def __repr__(self) -> str:
        return (
            f"Helix(radius={self._radius}, tan_lambda={self._tan_lambda}, "
            f"phi0={self._phi0}, centre=({self._x_centre}, {self._y_centre}))"
        )

    @property
    def reference_point(self) -> CartesianVector:
        return self._reference_point

    @property
    def momentum(self) -> CartesianVector:
        """Momentum at the reference point."""
        return self._momentum

    @property
    def charge(self) -> float:
        return self._charge

    @property
    def b_field(self) -> float:
        return self._b_field

    @property
    def radius(self) -> float:
        """Radius of the transverse circle in mm."""
        return self._radius

    @property
    def curvature(self) -> float:
        """Signed curvature `s / R` in 1/mm."""
        return self._sign / self._radius

    @property
    def tan_lambda(self) -> float:
        """Dip: longitudinal over transverse momentum."""
        return self._tan_lambda

    @property
    def phi0(self) -> float:
        """Momentum azimuth at the reference point."""
        return self._phi0

    @property
    def x_centre(self) -> float:
        return self._x_centre

    @property
    def y_centre(self) -> float:
        return self._y_centre

    def position_at(self, alpha: float) -> CartesianVector:
        """Return the position after turning by `alpha` radians."""
        phi = self._phi_ref - self._sign * alpha
        return CartesianVector(
            self._x_centre + self._radius * math.cos(phi),
            self._y_centre + self._radius * math.sin(phi),
            self._reference_point.z + self._radius * alpha * self._tan_lambda,
        )

    def momentum_at(self, alpha: float) -> CartesianVector:
        """Return the momentum after turning by `alpha` radians."""
        phi = self._phi0 - self._sign * alpha
        return CartesianVector(
            self._pxy * math.cos(phi),
            self._pxy * math.sin(phi),
            self._momentum.z,
        )

    def point_in_z(self, z: float) -> CartesianVector:
        """Return the helix point at a given z coordinate."""
        if self._tan_lambda == 0.0:
            raise ValueError("Helix with zero dip never leaves its reference z plane.")
        alpha = (z - self._reference_point.z) / (self._radius * self._tan_lambda)
        return self.position_at(alpha)

    def distance_to_point(self, point: CartesianVector) -> CartesianVector:
        """Distance from the helix to a point as `(dist_xy, dist_z, dist_3d)`.

        The transverse distance is measured to the circle; the longitudinal
        one at the turning angle (within half a turn of the reference point)
        closest to the point in the transverse plane.
        """
        dx = point.x - self._x_centre
        dy = point.y - self._y_centre
        dist_xy = abs(math.hypot(dx, dy) - self._radius)
        alpha = math.remainder(self._sign * (self._phi_ref - math.atan2(dy, dx)), 2.0 * math.pi)
        dist_z = abs(point.z - self.position_at(alpha).z)
        return CartesianVector(dist_xy, dist_z, math.hypot(dist_xy, dist_z))
