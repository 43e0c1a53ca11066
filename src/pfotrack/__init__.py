"""Public package exports for the particle-flow track entity."""

from .geometry import FIELD_REFERENCE_POINT, FieldLookup, SolenoidField, UniformField
from .helix import Helix
from .models import (
    CartesianVector,
    Cluster,
    MCParticle,
    MCParticleWeightMap,
    TrackParameters,
    TrackState,
)
from .pid import ParticleHypothesis, hypothesis_from_name, hypothesis_from_pdg
from .pool import TrackPool
from .status import (
    AlreadyInitializedError,
    AlreadyPresentError,
    InvalidParameterError,
    NotFoundError,
    NotInitializedError,
    StatusCode,
    StatusCodeError,
    raise_for_status,
)
from .track import Track

__all__ = [
    "Track",
    "TrackPool",
    "TrackParameters",
    "TrackState",
    "CartesianVector",
    "Cluster",
    "MCParticle",
    "MCParticleWeightMap",
    "Helix",
    "FieldLookup",
    "UniformField",
    "SolenoidField",
    "FIELD_REFERENCE_POINT",
    "ParticleHypothesis",
    "hypothesis_from_name",
    "hypothesis_from_pdg",
    "StatusCode",
    "StatusCodeError",
    "InvalidParameterError",
    "AlreadyInitializedError",
    "AlreadyPresentError",
    "NotFoundError",
    "NotInitializedError",
    "raise_for_status",
]
