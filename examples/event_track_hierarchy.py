"""Build a small event of tracks, link a decay, and attach truth information.

Run from repository root without installation:
    PYTHONPATH=src python examples/event_track_hierarchy.py
"""

from __future__ import annotations

import logging

from pfotrack import (
    CartesianVector,
    Cluster,
    MCParticle,
    SolenoidField,
    TrackParameters,
    TrackPool,
    TrackState,
    hypothesis_from_name,
)


def _params(name: str, charge: int, momentum: CartesianVector, calo_position: CartesianVector) -> TrackParameters:
    """Straight-line placeholder states; a real producer fills these from the fit."""
    state = TrackState(calo_position, momentum)
    return TrackParameters.from_hypothesis(
        hypothesis_from_name(name),
        charge=charge,
        d0=0.0,
        z0=0.0,
        momentum_at_dca=momentum,
        track_state_at_start=TrackState(CartesianVector(0.0, 0.0, 0.0), momentum),
        track_state_at_end=state,
        track_state_at_calorimeter=state,
        time_at_calorimeter=6.0,
        reaches_calorimeter=True,
        is_projected_to_endcap=False,
        can_form_pfo=True,
        can_form_clusterless_pfo=False,
    )


def main() -> int:
    """Create a kink (pion -> muon) and print the resulting hierarchy."""
    logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s][%(name)s] %(message)s")
    pool = TrackPool(SolenoidField(inner_b_field=3.5, outer_b_field=-1.5, coil_radius=3400.0))

    pion = pool.create_track(
        _params("pi", 1, CartesianVector(4.0, 1.0, 0.5), CartesianVector(1800.0, 450.0, 220.0))
    )
    muon = pool.create_track(
        _params("mu", 1, CartesianVector(3.6, 1.2, 0.4), CartesianVector(1800.0, 600.0, 200.0))
    )
    pool.set_parent_daughter_relationship(pion, muon)

    true_muon = MCParticle(pdg_id=-13, energy=3.8, label="mc-muon")
    muon.set_mc_particle_weight_map({true_muon: 0.92, MCParticle(pdg_id=22, label="mc-fsr"): 0.08})
    muon.set_associated_cluster(Cluster("ecal-7"))

    for track in pool:
        print(track)
        print(f" helix radius {track.helix_fit_at_calorimeter.radius:.1f} mm")
    print(f"Main truth particle of muon: {muon.get_main_mc_particle().label}")
    print(f"Muon registered as pion daughter: {muon in pion.daughter_tracks}")

    pool.reset()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
