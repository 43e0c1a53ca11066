"""Particle hypotheses used to assign mass and PDG code to tracks.

Each hypothesis is stored under its particle PDG code (the particle, not the
antiparticle) together with the charge that code carries. Lookups accept
either sign of the code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParticleHypothesis:
    """Named charged-particle hypothesis."""

    name: str
    mass: float
    pdg_id: int
    charge: int


_HYPOTHESES = (
    ParticleHypothesis(name="e", mass=0.00051099895, pdg_id=11, charge=-1),
    ParticleHypothesis(name="mu", mass=0.1056583755, pdg_id=13, charge=-1),
    ParticleHypothesis(name="pi", mass=0.13957039, pdg_id=211, charge=1),
    ParticleHypothesis(name="K", mass=0.493677, pdg_id=321, charge=1),
    ParticleHypothesis(name="p", mass=0.93827208816, pdg_id=2212, charge=1),
)

_PDG_TO_HYPOTHESIS: dict[int, ParticleHypothesis] = {h.pdg_id: h for h in _HYPOTHESES}

_ALIASES = {
    "e": 11,
    "electron": 11,
    "mu": 13,
    "muon": 13,
    "pi": 211,
    "pion": 211,
    "k": 321,
    "kaon": 321,
    "p": 2212,
    "proton": 2212,
}


def hypothesis_from_pdg(pdg_id: int) -> ParticleHypothesis:
    """Resolve a (signed) PDG code into a hypothesis."""
    try:
        return _PDG_TO_HYPOTHESIS[abs(int(pdg_id))]
    except KeyError as exc:
        supported = ", ".join(str(k) for k in sorted(_PDG_TO_HYPOTHESIS))
        raise ValueError(
            f"Unknown PDG code {pdg_id}. Supported codes: {supported}"
        ) from exc


def hypothesis_from_name(name: str) -> ParticleHypothesis:
    """Resolve a short particle name (e.g. `pi`, `kaon`) into a hypothesis."""
    key = name.strip().lower()
    try:
        return _PDG_TO_HYPOTHESIS[_ALIASES[key]]
    except KeyError as exc:
        supported = ", ".join(sorted(_ALIASES))
        raise ValueError(
            f"Unknown particle hypothesis name '{name}'. Supported names: {supported}"
        ) from exc
