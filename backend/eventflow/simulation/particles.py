from dataclasses import dataclass, replace
from enum import Enum

from eventflow.ir.topology import FlowEvent


class ParticleState(str, Enum):
    TRAVELING = "traveling"
    PARKED = "parked"
    COMPLETED = "completed"


class EdgeSelection(str, Enum):
    """How one outgoing edge is picked when several qualify."""
    FIRST = "first"
    RANDOM = "random"


@dataclass
class Particle:
    id: str
    event: FlowEvent              # working copy, rewritten by transformations
    original_event: FlowEvent
    edge_index: int
    path_index: int = -1          # itinerary cursor, -1 before joining
    progress: float = 0.0         # 0..1 along the current edge
    x: float = 0.0
    y: float = 0.0
    state: ParticleState = ParticleState.TRAVELING

    @classmethod
    def spawn(cls, particle_id: str, event: FlowEvent, edge_index: int, path_index: int, x: float, y: float):
        return cls(
            id=particle_id,
            event=replace(event),
            original_event=event,
            edge_index=edge_index,
            path_index=path_index,
            x=x,
            y=y,
        )


@dataclass
class DelayedParticle:
    particle: Particle
    node_id: str
    remaining: float   # ms
    total: float

    @property
    def elapsed_fraction(self) -> float:
        if self.total <= 0:
            return 1.0
        return 1 - max(self.remaining, 0.0) / self.total


@dataclass
class EventTimer:
    event: FlowEvent
    elapsed: float = 0.0   # ms since the last spawn
