"""
Animation engine - the tick loop around a ParticleSimulator.

Each event has its own spawn timer. Per tick the timer accumulates
``delta * speed`` and spawns one particle per whole interval, at most
MAX_SPAWNS_PER_TICK times; a backlog still larger than one interval after
that is dropped.

There is no wall clock here: callers drive ``tick(delta_ms)`` themselves,
or use ``run()`` for a fixed-step headless simulation.
"""

import logging
import random
from typing import Callable, Dict, List, Optional

from eventflow import config
from eventflow.compiler.layout import compute_layout
from eventflow.compiler.types import Layout
from eventflow.ir.topology import FlowEvent, Topology
from eventflow.simulation.particles import EdgeSelection, EventTimer, Particle
from eventflow.simulation.simulator import ParticleSimulator

logger = logging.getLogger(__name__)

MAX_SPAWNS_PER_TICK = 5
MIN_SPEED = 0.25
MAX_SPEED = 4.0
MIN_SPAWN_RATE = 0.5
MAX_SPAWN_RATE = 5.0
DEFAULT_SPAWN_RATE = 2.0
DEFAULT_FRAME_MS = 1000 / 60

RenderHook = Callable[["AnimationEngine"], None]


class AnimationEngine:
    def __init__(
        self,
        topology: Topology,
        layout: Optional[Layout] = None,
        edge_selection: Optional[str] = None,
        seed: Optional[int] = None,
        render_hook: Optional[RenderHook] = None,
    ):
        self.topology = topology
        self.layout = layout if layout is not None else compute_layout(topology)
        self.rng = random.Random(seed if seed is not None else config.RANDOM_SEED)
        self.simulator = ParticleSimulator(
            topology,
            self.layout,
            edge_selection=EdgeSelection(edge_selection or config.EDGE_SELECTION),
            rng=self.rng,
        )
        self.render_hook = render_hook

        self.is_playing = False
        self.speed = 1.0
        self.global_spawn_rate = DEFAULT_SPAWN_RATE
        self.timers: Dict[str, EventTimer] = {}

        self.elapsed_ms = 0.0
        self.spawned_count = 0
        self.completed_count = 0

        self.init_timers()

    # ---------- controls ----------

    def init_timers(self):
        self.timers = {event.name: EventTimer(event=event) for event in self.topology.events}

    def play(self):
        if self.is_playing:
            return
        self.is_playing = True
        if not self.timers:
            self.init_timers()

    def pause(self):
        self.is_playing = False

    def toggle(self) -> bool:
        if self.is_playing:
            self.pause()
        else:
            self.play()
        return self.is_playing

    def set_speed(self, speed: float):
        self.speed = max(MIN_SPEED, min(MAX_SPEED, speed))

    def set_spawn_rate(self, rate: float):
        """Fallback rate for events that do not declare one."""
        self.global_spawn_rate = max(MIN_SPAWN_RATE, min(MAX_SPAWN_RATE, rate))

    def reset(self):
        """Drop every particle and restart the spawn timers; keeps playing."""
        self.simulator.clear()
        self.init_timers()

    def stop(self):
        self.pause()
        self.simulator.clear()
        self.timers.clear()
        self._render()

    # ---------- spawning ----------

    def spawn_rate(self, event: FlowEvent) -> float:
        if event.rate and event.rate > 0:
            return event.rate
        return self.global_spawn_rate

    def pick_source(self, event: FlowEvent) -> Optional[str]:
        if event.source and event.source in self.layout.nodes:
            return event.source

        sources = [n for n in self.topology.source_nodes() if n in self.layout.nodes]
        if sources:
            return self.rng.choice(sources)

        nodes = list(self.layout.nodes)
        return self.rng.choice(nodes) if nodes else None

    def spawn_event(self, event: FlowEvent) -> Optional[Particle]:
        source = self.pick_source(event)
        if source is None:
            return None

        particle = self.simulator.add_particle(event, source)
        if particle is not None:
            self.spawned_count += 1
        return particle

    def spawn_random_event(self) -> Optional[Particle]:
        if not self.topology.events:
            return None
        return self.spawn_event(self.rng.choice(self.topology.events))

    def update_spawning(self, delta_ms: float) -> int:
        """Advance every spawn timer. Returns how many particles were spawned."""
        scaled = delta_ms * self.speed
        spawned = 0

        for timer in self.timers.values():
            interval = 1000 / self.spawn_rate(timer.event)
            timer.elapsed += scaled

            count = 0
            while timer.elapsed >= interval and count < MAX_SPAWNS_PER_TICK:
                if self.spawn_event(timer.event) is not None:
                    spawned += 1
                timer.elapsed -= interval
                count += 1

            if timer.elapsed > interval:
                logger.debug(
                    "Spawn cap hit for %s, dropping %.0fms backlog",
                    timer.event.name,
                    timer.elapsed,
                )
                timer.elapsed = 0.0

        return spawned

    # ---------- loop ----------

    def tick(self, delta_ms: float) -> List[Particle]:
        """One frame: move particles, spawn, render. No-op while paused."""
        if not self.is_playing:
            return []

        self.elapsed_ms += delta_ms
        completed = self.simulator.update(delta_ms, self.speed)
        self.completed_count += len(completed)

        self.update_spawning(delta_ms)
        self._render()
        return completed

    def run(self, duration_ms: float, frame_ms: float = DEFAULT_FRAME_MS) -> List[Particle]:
        """Play for ``duration_ms`` in fixed ``frame_ms`` steps. Returns completed particles."""
        if frame_ms <= 0:
            raise ValueError("frame_ms must be positive")

        self.play()
        completed: List[Particle] = []
        remaining = duration_ms

        while remaining > 0:
            step = min(frame_ms, remaining)
            completed.extend(self.tick(step))
            remaining -= step

        return completed

    def _render(self):
        if self.render_hook is not None:
            self.render_hook(self)

    # ---------- views ----------

    @property
    def particles(self) -> List[Particle]:
        return self.simulator.particles

    @property
    def delayed(self):
        return self.simulator.delayed
