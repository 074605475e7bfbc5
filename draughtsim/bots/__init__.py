"""
Bots module - Actor policies.

Provides:
- ActorType / SimulationPolicy: which policy drives a side
- Actor and its concrete policies (human, random, simulated)
- SimulationOrchestrator: concurrent self-play move selection
"""

from .policy import ActorKind, ActorType, SimulationPolicy
from .actor import (
    Actor,
    HumanActor,
    MostKillsActor,
    RandomActor,
    SimulatedActor,
    create_actor,
)
from .simulation import CandidateOutcome, SimulationOrchestrator, choose_candidate

__all__ = [
    "ActorKind",
    "ActorType",
    "SimulationPolicy",
    "Actor",
    "HumanActor",
    "MostKillsActor",
    "RandomActor",
    "SimulatedActor",
    "create_actor",
    "CandidateOutcome",
    "SimulationOrchestrator",
    "choose_candidate",
]
