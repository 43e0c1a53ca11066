"""Magnetic-field lookups consumed when a track builds its helix fit."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from .models import CartesianVector

# Tracks evaluate the field here rather than at their own position.
FIELD_REFERENCE_POINT = CartesianVector(0.0, 0.0, 0.0)


class FieldLookup(Protocol):
    """Anything able to return the field magnitude (Tesla) at a position (mm)."""

    def get_field(self, position: CartesianVector) -> float:
        ...


@dataclass(frozen=True)
class UniformField:
    """Constant field over the whole detector."""

    b_field: float

    def get_field(self, position: CartesianVector) -> float:
        return self.b_field


@dataclass(frozen=True)
class SolenoidField:
    """Two-region solenoid: one value inside the coil, another outside.

    The region is chosen from the transverse distance of the position to
    the beam axis; positions exactly on the coil radius count as inside.
    """

    inner_b_field: float
    outer_b_field: float
    coil_radius: float

    def __post_init__(self) -> None:
        if self.coil_radius <= 0.0:
            raise ValueError(f"Coil radius must be positive, got {self.coil_radius}.")

    def get_field(self, position: CartesianVector) -> float:
        if math.hypot(position.x, position.y) <= self.coil_radius:
            return self.inner_b_field
        return self.outer_b_field
