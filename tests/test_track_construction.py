"""Unit tests for track construction, invariants, and release."""

from __future__ import annotations

import math
import unittest

from pfotrack import (
    FIELD_REFERENCE_POINT,
    CartesianVector,
    InvalidParameterError,
    NotInitializedError,
    StatusCodeError,
    Track,
    TrackParameters,
    TrackState,
    UniformField,
    hypothesis_from_name,
)


class _RecordingField:
    """Field lookup that remembers every position it was asked about."""

    def __init__(self, b_field: float) -> None:
        self.b_field = b_field
        self.positions: list[CartesianVector] = []

    def get_field(self, position: CartesianVector) -> float:
        self.positions.append(position)
        return self.b_field


class _BrokenField:
    """Field lookup whose backing geometry is unavailable."""

    def get_field(self, position: CartesianVector) -> float:
        raise RuntimeError("geometry not loaded")


def _params(**overrides) -> TrackParameters:
    """Build a valid positive-pion parameter bundle, with optional overrides."""
    values = dict(
        d0=0.12,
        z0=-0.34,
        particle_id=211,
        charge=1,
        mass=0.13957039,
        momentum_at_dca=CartesianVector(1.0, 2.0, 2.0),
        track_state_at_start=TrackState(CartesianVector(0.1, 0.0, -0.3), CartesianVector(1.0, 2.0, 2.0)),
        track_state_at_end=TrackState(CartesianVector(800.0, 1200.0, 1500.0), CartesianVector(1.1, 1.9, 2.0)),
        track_state_at_calorimeter=TrackState(
            CartesianVector(1000.0, 1500.0, 1800.0), CartesianVector(1.2, 1.8, 2.0)
        ),
        time_at_calorimeter=7.5,
        reaches_calorimeter=True,
        is_projected_to_endcap=False,
        can_form_pfo=True,
        can_form_clusterless_pfo=False,
        parent_address="lcio-track-17",
    )
    values.update(overrides)
    return TrackParameters(**values)


class TestTrackConstruction(unittest.TestCase):
    """Validate field copying, derived kinematics, and construction failures."""

    def test_accessors_return_supplied_values(self) -> None:
        """Every scalar, vector, and flag must be copied verbatim."""
        params = _params()
        track = Track(params, UniformField(3.5))

        self.assertEqual(track.d0, 0.12)
        self.assertEqual(track.z0, -0.34)
        self.assertEqual(track.particle_id, 211)
        self.assertEqual(track.charge, 1)
        self.assertEqual(track.mass, 0.13957039)
        self.assertEqual(track.momentum_at_dca, CartesianVector(1.0, 2.0, 2.0))
        self.assertEqual(track.track_state_at_start, params.track_state_at_start)
        self.assertEqual(track.track_state_at_end, params.track_state_at_end)
        self.assertEqual(track.track_state_at_calorimeter, params.track_state_at_calorimeter)
        self.assertEqual(track.time_at_calorimeter, 7.5)
        self.assertTrue(track.reaches_calorimeter)
        self.assertFalse(track.is_projected_to_endcap)
        self.assertTrue(track.can_form_pfo)
        self.assertFalse(track.can_form_clusterless_pfo)
        self.assertEqual(track.parent_address, "lcio-track-17")

    def test_derived_momentum_magnitude_and_energy(self) -> None:
        """Energy at DCA must be sqrt(m^2 + |p|^2)."""
        track = Track(_params(), UniformField(3.5))

        self.assertAlmostEqual(track.momentum_magnitude_at_dca, 3.0, places=12)
        self.assertAlmostEqual(
            track.energy_at_dca,
            math.sqrt(0.13957039 * 0.13957039 + 9.0),
            places=12,
        )

    def test_fresh_track_has_empty_relationships(self) -> None:
        """A new track is available and carries no associations."""
        track = Track(_params(), UniformField(3.5))

        self.assertTrue(track.is_available)
        self.assertFalse(track.has_associated_cluster)
        self.assertEqual(track.parent_tracks, ())
        self.assertEqual(track.daughter_tracks, ())
        self.assertEqual(track.sibling_tracks, ())
        self.assertEqual(track.mc_particle_weight_map, {})

    def test_zero_charge_is_rejected(self) -> None:
        """A neutral track must never be constructed."""
        with self.assertRaises(InvalidParameterError):
            Track(_params(charge=0), UniformField(3.5))

    def test_zero_energy_is_rejected(self) -> None:
        """Massless tracks with no momentum have zero energy and must fail."""
        with self.assertRaises(InvalidParameterError):
            Track(
                _params(mass=0.0, momentum_at_dca=CartesianVector(0.0, 0.0, 0.0)),
                UniformField(3.5),
            )

    def test_massive_track_at_rest_is_accepted(self) -> None:
        """Zero momentum alone is fine as long as the mass keeps energy non-zero."""
        track = Track(_params(momentum_at_dca=CartesianVector(0.0, 0.0, 0.0)), UniformField(3.5))
        self.assertAlmostEqual(track.energy_at_dca, 0.13957039, places=12)

    def test_invalid_parameter_error_carries_status_code(self) -> None:
        """Construction errors are typed status-code errors and ValueErrors."""
        with self.assertRaises(StatusCodeError) as ctx:
            Track(_params(charge=0), UniformField(3.5))
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertEqual(ctx.exception.status_code.value, "invalid parameter")

    def test_field_is_looked_up_at_reference_origin(self) -> None:
        """The field must come from the origin, not from the track position."""
        field = _RecordingField(3.5)
        Track(_params(), field)
        self.assertEqual(field.positions, [FIELD_REFERENCE_POINT])

    def test_helix_is_built_from_calorimeter_state(self) -> None:
        """Helix fit uses the calorimeter state, track charge, and field value."""
        params = _params(charge=-1)
        track = Track(params, UniformField(3.5))
        helix = track.helix_fit_at_calorimeter

        self.assertEqual(helix.reference_point, params.track_state_at_calorimeter.position)
        self.assertEqual(helix.momentum, params.track_state_at_calorimeter.momentum)
        self.assertEqual(helix.charge, -1.0)
        self.assertEqual(helix.b_field, 3.5)

    def test_field_lookup_errors_propagate(self) -> None:
        """Collaborator failures surface unchanged from construction."""
        with self.assertRaises(RuntimeError):
            Track(_params(), _BrokenField())

    def test_helix_errors_propagate(self) -> None:
        """A zero field cannot bend the track; the helix error must propagate."""
        with self.assertRaises(ValueError):
            Track(_params(), UniformField(0.0))

    def test_release_drops_helix_and_references(self) -> None:
        """Releasing a track clears its links but leaves the linked tracks intact."""
        field = UniformField(3.5)
        track = Track(_params(), field)
        parent = Track(_params(), field)
        track.add_parent(parent)
        parent.add_daughter(track)

        track.release()

        self.assertEqual(track.parent_tracks, ())
        with self.assertRaises(NotInitializedError):
            _ = track.helix_fit_at_calorimeter
        self.assertEqual(parent.daughter_tracks, (track,))
        self.assertIsNotNone(parent.helix_fit_at_calorimeter)

    def test_parameters_from_hypothesis_fill_mass_and_signed_pdg(self) -> None:
        """Hypothesis helper signs the PDG code to match the track charge."""
        base = _params()
        shared = dict(
            d0=base.d0,
            z0=base.z0,
            momentum_at_dca=base.momentum_at_dca,
            track_state_at_start=base.track_state_at_start,
            track_state_at_end=base.track_state_at_end,
            track_state_at_calorimeter=base.track_state_at_calorimeter,
            time_at_calorimeter=base.time_at_calorimeter,
            reaches_calorimeter=True,
            is_projected_to_endcap=True,
            can_form_pfo=True,
            can_form_clusterless_pfo=True,
        )
        pi_minus = TrackParameters.from_hypothesis(hypothesis_from_name("pi"), charge=-1, **shared)
        mu_minus = TrackParameters.from_hypothesis(hypothesis_from_name("muon"), charge=-1, **shared)

        self.assertEqual(pi_minus.particle_id, -211)
        self.assertEqual(mu_minus.particle_id, 13)
        self.assertAlmostEqual(mu_minus.mass, 0.1056583755, places=12)
        self.assertEqual(Track(pi_minus, UniformField(3.5)).particle_id, -211)

    def test_debug_string_lists_impact_parameters_and_momentum(self) -> None:
        """Debug dump shows d0, z0, and momentum at DCA on separate lines."""
        text = str(Track(_params(), UniformField(3.5)))
        lines = text.splitlines()

        self.assertEqual(lines[0].strip(), "Track:")
        self.assertEqual(lines[1], " d0     0.12")
        self.assertEqual(lines[2], " z0     -0.34")
        self.assertTrue(lines[3].startswith(" p0     "))
        self.assertIn("length: 3.0", lines[3])


if __name__ == "__main__":
    unittest.main()
