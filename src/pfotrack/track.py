"""Reconstructed charged-particle track used by particle-flow reconstruction.

A `Track` is immutable after construction apart from its relationships:
hierarchy links to other tracks, at most one associated cluster, a weighted
map of truth particles, and an availability flag. Relationship references are
non-owning; the event-level `TrackPool` owns track lifetimes.

Construction and queries raise `StatusCodeError` subclasses. Mutators return
a `StatusCode` and leave the track unchanged when they fail.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from .geometry import FIELD_REFERENCE_POINT, FieldLookup
from .helix import Helix
from .models import (
    CartesianVector,
    Cluster,
    MCParticle,
    MCParticleWeightMap,
    TrackParameters,
    TrackState,
)
from .status import InvalidParameterError, NotInitializedError, StatusCode


class Track:
    """Charged-particle track with its helix fit at the calorimeter."""

    def __init__(self, parameters: TrackParameters, field_lookup: FieldLookup) -> None:
        """Validate the parameter bundle and build the owned helix fit.

        Raises `InvalidParameterError` when the derived energy at the DCA or
        the charge is exactly zero. Errors raised by the field lookup or the
        helix construction propagate unchanged.
        """
        momentum_magnitude = parameters.momentum_at_dca.magnitude
        energy = math.sqrt(parameters.mass * parameters.mass + momentum_magnitude * momentum_magnitude)
        if energy == 0.0:
            raise InvalidParameterError("Track energy at DCA must be non-zero.")
        if parameters.charge == 0:
            raise InvalidParameterError("Track charge must be non-zero.")

        self._d0 = parameters.d0
        self._z0 = parameters.z0
        self._particle_id = parameters.particle_id
        self._charge = parameters.charge
        self._mass = parameters.mass
        self._momentum_at_dca = parameters.momentum_at_dca
        self._momentum_magnitude_at_dca = momentum_magnitude
        self._energy_at_dca = energy
        self._track_state_at_start = parameters.track_state_at_start
        self._track_state_at_end = parameters.track_state_at_end
        self._track_state_at_calorimeter = parameters.track_state_at_calorimeter
        self._time_at_calorimeter = parameters.time_at_calorimeter
        self._reaches_calorimeter = parameters.reaches_calorimeter
        self._is_projected_to_endcap = parameters.is_projected_to_endcap
        self._can_form_pfo = parameters.can_form_pfo
        self._can_form_clusterless_pfo = parameters.can_form_clusterless_pfo
        self._parent_address = parameters.parent_address

        self._associated_cluster: Cluster | None = None
        self._mc_particle_weight_map: MCParticleWeightMap = {}
        # Ordered sets keyed by identity (Track does not define __eq__).
        self._parent_tracks: dict[Track, None] = {}
        self._daughter_tracks: dict[Track, None] = {}
        self._sibling_tracks: dict[Track, None] = {}
        self._is_available = True

        b_field = field_lookup.get_field(FIELD_REFERENCE_POINT)
        calo = self._track_state_at_calorimeter
        self._helix_fit_at_calorimeter: Helix | None = Helix(
            calo.position, calo.momentum, float(self._charge), b_field
        )

    def __str__(self) -> str:
        return "\n".join(
            (
                " Track: ",
                f" d0     {self._d0}",
                f" z0     {self._z0}",
                f" p0     {self._momentum_at_dca}",
            )
        )

    def __repr__(self) -> str:
        return (
            f"Track(particle_id={self._particle_id}, charge={self._charge}, "
            f"p={self._momentum_magnitude_at_dca})"
        )

    # Kinematics fixed at construction

    @property
    def d0(self) -> float:
        """Transverse impact parameter."""
        return self._d0

    @property
    def z0(self) -> float:
        """Longitudinal impact parameter."""
        return self._z0

    @property
    def particle_id(self) -> int:
        """PDG code of the particle hypothesis."""
        return self._particle_id

    @property
    def charge(self) -> int:
        return self._charge

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def momentum_at_dca(self) -> CartesianVector:
        return self._momentum_at_dca

    @property
    def momentum_magnitude_at_dca(self) -> float:
        return self._momentum_magnitude_at_dca

    @property
    def energy_at_dca(self) -> float:
        """Energy at the DCA, `sqrt(mass^2 + p^2)`."""
        return self._energy_at_dca

    @property
    def track_state_at_start(self) -> TrackState:
        return self._track_state_at_start

    @property
    def track_state_at_end(self) -> TrackState:
        return self._track_state_at_end

    @property
    def track_state_at_calorimeter(self) -> TrackState:
        return self._track_state_at_calorimeter

    @property
    def time_at_calorimeter(self) -> float:
        return self._time_at_calorimeter

    @property
    def reaches_calorimeter(self) -> bool:
        return self._reaches_calorimeter

    @property
    def is_projected_to_endcap(self) -> bool:
        return self._is_projected_to_endcap

    @property
    def can_form_pfo(self) -> bool:
        return self._can_form_pfo

    @property
    def can_form_clusterless_pfo(self) -> bool:
        return self._can_form_clusterless_pfo

    @property
    def parent_address(self) -> Any:
        """Opaque handle to the originating detector-level track."""
        return self._parent_address

    @property
    def helix_fit_at_calorimeter(self) -> Helix:
        """Helix fit to the track state at the calorimeter."""
        if self._helix_fit_at_calorimeter is None:
            raise NotInitializedError("Track has been released; its helix fit is gone.")
        return self._helix_fit_at_calorimeter

    # Availability

    @property
    def is_available(self) -> bool:
        """Whether no particle-flow object has consumed this track yet."""
        return self._is_available

    def set_availability(self, is_available: bool) -> None:
        self._is_available = bool(is_available)

    # Truth association

    @property
    def mc_particle_weight_map(self) -> MCParticleWeightMap:
        """Copy of the truth-weight map."""
        return dict(self._mc_particle_weight_map)

    def get_main_mc_particle(self) -> MCParticle:
        """Return the truth particle with the largest positive weight.

        Entries are scanned in insertion order and only a strictly larger
        weight replaces the current best, so the first maximal entry wins.
        """
        best_weight = 0.0
        best_mc_particle: MCParticle | None = None
        for mc_particle, weight in self._mc_particle_weight_map.items():
            if weight > best_weight:
                best_weight = weight
                best_mc_particle = mc_particle
        if best_mc_particle is None:
            raise NotInitializedError("Track has no truth particle with positive weight.")
        return best_mc_particle

    def set_mc_particle_weight_map(self, weight_map: Mapping[MCParticle, float]) -> None:
        """Replace the truth-weight map wholesale."""
        self._mc_particle_weight_map = dict(weight_map)

    def remove_mc_particles(self) -> None:
        self._mc_particle_weight_map.clear()

    # Cluster association

    @property
    def has_associated_cluster(self) -> bool:
        return self._associated_cluster is not None

    @property
    def associated_cluster(self) -> Cluster:
        if self._associated_cluster is None:
            raise NotInitializedError("Track has no associated cluster.")
        return self._associated_cluster

    def set_associated_cluster(self, cluster: Cluster | None) -> StatusCode:
        """Associate a cluster; any existing association blocks the call."""
        if cluster is None:
            return StatusCode.INVALID_PARAMETER
        if self._associated_cluster is not None:
            return StatusCode.ALREADY_INITIALIZED
        self._associated_cluster = cluster
        return StatusCode.SUCCESS

    def remove_associated_cluster(self, cluster: Cluster | None) -> StatusCode:
        """Drop the association if `cluster` is the associated one."""
        if self._associated_cluster is None or cluster is not self._associated_cluster:
            return StatusCode.NOT_FOUND
        self._associated_cluster = None
        return StatusCode.SUCCESS

    # Track hierarchy

    @property
    def parent_tracks(self) -> tuple[Track, ...]:
        return tuple(self._parent_tracks)

    @property
    def daughter_tracks(self) -> tuple[Track, ...]:
        return tuple(self._daughter_tracks)

    @property
    def sibling_tracks(self) -> tuple[Track, ...]:
        return tuple(self._sibling_tracks)

    def add_parent(self, track: Track | None) -> StatusCode:
        return self._add_to(self._parent_tracks, track)

    def add_daughter(self, track: Track | None) -> StatusCode:
        return self._add_to(self._daughter_tracks, track)

    def add_sibling(self, track: Track | None) -> StatusCode:
        return self._add_to(self._sibling_tracks, track)

    @staticmethod
    def _add_to(tracks: dict[Track, None], track: Track | None) -> StatusCode:
        """Insert into one relationship set without replacing members."""
        if track is None:
            return StatusCode.INVALID_PARAMETER
        if track in tracks:
            return StatusCode.ALREADY_PRESENT
        tracks[track] = None
        return StatusCode.SUCCESS

    # Lifecycle, driven by the owning pool

    def release(self) -> None:
        """Drop the helix fit and clear every reference this track holds.

        Referenced tracks, clusters and truth particles are left untouched.
        """
        self._helix_fit_at_calorimeter = None
        self._parent_tracks.clear()
        self._daughter_tracks.clear()
        self._sibling_tracks.clear()
        self._associated_cluster = None
        self._mc_particle_weight_map.clear()

    def unlink(self, track: Track) -> None:
        """Forget every parent, daughter and sibling reference to `track`.

        Used by the owning pool when `track` is deleted; the other track is
        left untouched and unknown tracks are ignored.
        """
        self._parent_tracks.pop(track, None)
        self._daughter_tracks.pop(track, None)
        self._sibling_tracks.pop(track, None)
