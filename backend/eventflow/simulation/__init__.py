from eventflow.simulation.engine import AnimationEngine
from eventflow.simulation.particles import (
    DelayedParticle,
    EdgeSelection,
    EventTimer,
    Particle,
    ParticleState,
)
from eventflow.simulation.simulator import BASE_SPEED, ParticleSimulator

__all__ = [
    "AnimationEngine",
    "BASE_SPEED",
    "DelayedParticle",
    "EdgeSelection",
    "EventTimer",
    "Particle",
    "ParticleSimulator",
    "ParticleState",
]
