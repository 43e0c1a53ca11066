"""Core data models used by the particle-flow track entity.

This module defines:
- immutable geometry objects (`CartesianVector`, `TrackState`)
- the pre-validated track input bundle (`TrackParameters`)
- opaque identity records for calorimeter clusters and truth particles
  (`Cluster`, `MCParticle`) and the truth-weight map alias.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .pid import ParticleHypothesis


@dataclass(frozen=True)
class CartesianVector:
    """Simple 3-vector with convenience properties and arithmetic."""

    x: float
    y: float
    z: float

    def __add__(self, other: "CartesianVector") -> "CartesianVector":
        """Component-wise vector addition."""
        return CartesianVector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "CartesianVector") -> "CartesianVector":
        """Component-wise vector subtraction."""
        return CartesianVector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scale: float) -> "CartesianVector":
        """Scale all components."""
        return CartesianVector(self.x * scale, self.y * scale, self.z * scale)

    __rmul__ = __mul__

    def __neg__(self) -> "CartesianVector":
        return CartesianVector(-self.x, -self.y, -self.z)

    def __str__(self) -> str:
        return f"  x: {self.x} y: {self.y} z: {self.z} length: {self.magnitude}"

    @property
    def magnitude_squared(self) -> float:
        """Squared vector length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def magnitude(self) -> float:
        """Vector length."""
        return math.sqrt(self.magnitude_squared)

    def dot(self, other: "CartesianVector") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "CartesianVector") -> "CartesianVector":
        return CartesianVector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def unit_vector(self) -> "CartesianVector":
        """Return the normalized direction; a null vector has none."""
        mag = self.magnitude
        if mag == 0.0:
            raise ValueError("Cannot normalize a null vector.")
        return CartesianVector(self.x / mag, self.y / mag, self.z / mag)


@dataclass(frozen=True)
class TrackState:
    """Position and momentum of a track at one point along its trajectory."""

    position: CartesianVector
    momentum: CartesianVector

    def __str__(self) -> str:
        return f" TrackState: \n position {self.position}\n momentum {self.momentum}"


@dataclass(frozen=True)
class TrackParameters:
    """Fully populated, pre-validated input bundle for one track.

    Momentum and positions follow the mm/GeV convention. `parent_address`
    is an opaque handle to the originating detector-level track; it is
    copied through untouched and never owned.
    """

    d0: float
    z0: float
    particle_id: int
    charge: int
    mass: float
    momentum_at_dca: CartesianVector
    track_state_at_start: TrackState
    track_state_at_end: TrackState
    track_state_at_calorimeter: TrackState
    time_at_calorimeter: float
    reaches_calorimeter: bool
    is_projected_to_endcap: bool
    can_form_pfo: bool
    can_form_clusterless_pfo: bool
    parent_address: Any = None

    @classmethod
    def from_hypothesis(
        cls,
        hypothesis: "ParticleHypothesis",
        charge: int,
        **kwargs: Any,
    ) -> "TrackParameters":
        """Build parameters taking `particle_id` and `mass` from a hypothesis.

        The PDG code is signed to match the track charge: a negative pion
        yields `-211`, while a negative muon keeps `13`.
        """
        pdg_id = hypothesis.pdg_id if charge * hypothesis.charge > 0 else -hypothesis.pdg_id
        return cls(particle_id=pdg_id, charge=charge, mass=hypothesis.mass, **kwargs)


@dataclass(eq=False)
class Cluster:
    """Opaque calorimeter-cluster handle, compared by identity."""

    cluster_id: str = ""


@dataclass(eq=False)
class MCParticle:
    """Opaque simulation-truth particle handle, compared by identity."""

    pdg_id: int = 0
    energy: float = 0.0
    momentum: CartesianVector = field(default_factory=lambda: CartesianVector(0.0, 0.0, 0.0))
    label: str = ""


# Insertion order of the map is the storage order used for tie-breaks.
MCParticleWeightMap = dict[MCParticle, float]
