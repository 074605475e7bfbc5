"""
Actor Policy - Which decision procedure drives a side.

ActorType is a tagged union:
- HUMAN: moves come from the interactive collaborator
- RANDOM: uniform random move
- MOST_KILLS: placeholder, not implemented
- SIMULATED(sub_policy): self-play lookahead; every candidate is
  played out to the end with sub_policy driving both sides

sub_policy is a SimulationPolicy, the restricted set of policies a
headless sub-game can run. It converts back into an ActorType when
the nested game is built, so the recursion never needs a
self-referential type.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ActorKind(Enum):
    """Tag of an ActorType."""
    HUMAN = "human"
    RANDOM = "random"
    MOST_KILLS = "most-kills"
    SIMULATED = "simulated"


class SimulationPolicy(Enum):
    """Policies allowed inside a simulated sub-game."""
    RANDOM = "random"
    MOST_KILLS = "most-kills"

    def to_actor_type(self) -> ActorType:
        if self is SimulationPolicy.RANDOM:
            return ActorType.random()
        return ActorType.most_kills()


@dataclass(frozen=True)
class ActorType:
    """
    Policy selection for one side.

    Usage:
        ActorType.human()
        ActorType.simulated(SimulationPolicy.RANDOM)
    """
    kind: ActorKind
    sub_policy: SimulationPolicy | None = None

    def __post_init__(self):
        if (self.kind == ActorKind.SIMULATED) != (self.sub_policy is not None):
            raise ValueError("sub_policy is required for, and only for, SIMULATED")

    @classmethod
    def human(cls) -> ActorType:
        return cls(ActorKind.HUMAN)

    @classmethod
    def random(cls) -> ActorType:
        return cls(ActorKind.RANDOM)

    @classmethod
    def most_kills(cls) -> ActorType:
        return cls(ActorKind.MOST_KILLS)

    @classmethod
    def simulated(cls, sub_policy: SimulationPolicy) -> ActorType:
        return cls(ActorKind.SIMULATED, sub_policy)

    @classmethod
    def parse(cls, name: str) -> ActorType:
        """
        Parse a CLI name: human, random, most-kills,
        simulated-random or simulated-most-kills.
        """
        name = name.strip().lower()
        prefix = ActorKind.SIMULATED.value + "-"
        if name.startswith(prefix):
            return cls.simulated(SimulationPolicy(name[len(prefix):]))
        kind = ActorKind(name)
        if kind == ActorKind.SIMULATED:
            raise ValueError("simulated needs a sub-policy, e.g. simulated-random")
        return cls(kind)

    @property
    def is_human(self) -> bool:
        return self.kind == ActorKind.HUMAN

    @property
    def name(self) -> str:
        if self.sub_policy is not None:
            return f"{self.kind.value}-{self.sub_policy.value}"
        return self.kind.value


CHOICES = [
    "human",
    "random",
    "most-kills",
    "simulated-random",
    "simulated-most-kills",
]
