"""Tests for the animation engine: spawn timers, caps and controls."""

import pytest

from eventflow.dsl.parser import parse_dsl
from eventflow.simulation.engine import (
    MAX_SPAWNS_PER_TICK,
    MAX_SPAWN_RATE,
    MAX_SPEED,
    MIN_SPAWN_RATE,
    MIN_SPEED,
    AnimationEngine,
)
from eventflow.simulation.particles import EdgeSelection


def engine_for(dsl, **kwargs):
    kwargs.setdefault("seed", 11)
    return AnimationEngine(parse_dsl(dsl), **kwargs)


class TestSpawning:
    def test_rate_two_single_long_tick_spawns_two(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)
        engine.play()

        engine.tick(1200)

        assert engine.spawned_count == 2
        assert len(engine.particles) == 2
        assert engine.timers["event"].elapsed == pytest.approx(200)

    def test_no_spawn_before_first_interval(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)
        engine.play()

        engine.tick(499)
        assert engine.spawned_count == 0

        engine.tick(1)
        assert engine.spawned_count == 1

    def test_spawns_capped_per_tick_and_backlog_dropped(self):
        engine = engine_for("A -> B\nevent Burst { rate: 50 }")

        spawned = engine.update_spawning(1000)

        assert spawned == MAX_SPAWNS_PER_TICK
        assert engine.timers["Burst"].elapsed == 0

    def test_speed_scales_timer(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)
        engine.set_speed(2)

        assert engine.update_spawning(500) == 2

    def test_each_event_has_its_own_timer(self):
        engine = engine_for("A -> B\nevent Fast { rate: 4 }\nevent Slow { rate: 1 }")

        engine.update_spawning(1000)

        names = [p.event.name for p in engine.particles]
        assert names.count("Fast") == 4
        assert names.count("Slow") == 1

    def test_global_rate_for_events_without_rate(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)
        engine.topology.events[0].rate = 0

        engine.set_spawn_rate(4)
        assert engine.update_spawning(500) == 2


class TestSourceChoice:
    def test_declared_source(self):
        engine = engine_for("A -> B -> C\nevent E { source: B }")
        assert engine.pick_source(engine.topology.events[0]) == "B"

    def test_unknown_source_uses_graph_sources(self):
        engine = engine_for("A -> C\nB -> C\nevent E { source: Nowhere }")
        picks = {engine.pick_source(engine.topology.events[0]) for _ in range(40)}
        assert picks == {"A", "B"}

    def test_pure_cycle_uses_any_node(self):
        engine = engine_for("A -> B -> A")
        picks = {engine.pick_source(engine.topology.events[0]) for _ in range(40)}
        assert picks == {"A", "B"}

    def test_empty_topology_spawns_nothing(self):
        engine = engine_for("")

        assert engine.spawn_random_event() is None
        assert engine.update_spawning(5000) == 0

    def test_spawn_random_event(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=3)
        particle = engine.spawn_random_event()

        assert particle is not None
        assert particle.event.name == "event"
        assert engine.spawned_count == 1


class TestControls:
    def test_speed_is_clamped(self, scenario_topology):
        engine = AnimationEngine(scenario_topology)

        engine.set_speed(100)
        assert engine.speed == MAX_SPEED
        engine.set_speed(0)
        assert engine.speed == MIN_SPEED
        engine.set_speed(1.5)
        assert engine.speed == 1.5

    def test_spawn_rate_is_clamped(self, scenario_topology):
        engine = AnimationEngine(scenario_topology)

        engine.set_spawn_rate(0.01)
        assert engine.global_spawn_rate == MIN_SPAWN_RATE
        engine.set_spawn_rate(99)
        assert engine.global_spawn_rate == MAX_SPAWN_RATE

    def test_paused_tick_does_nothing(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)

        assert engine.tick(5000) == []
        assert engine.elapsed_ms == 0
        assert engine.spawned_count == 0

    def test_pause_keeps_particle_state(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)
        engine.run(600)
        snapshot = [(p.id, p.progress) for p in engine.particles]

        engine.pause()
        engine.tick(1000)
        engine.toggle()

        assert engine.is_playing is True
        assert [(p.id, p.progress) for p in engine.particles] == snapshot

    def test_toggle(self, scenario_topology):
        engine = AnimationEngine(scenario_topology)

        assert engine.toggle() is True
        assert engine.toggle() is False

    def test_reset_clears_particles_and_timers(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)
        engine.run(1000)
        assert engine.particles

        engine.reset()

        assert engine.particles == [] and engine.delayed == []
        assert engine.timers["event"].elapsed == 0
        assert engine.is_playing is True

    def test_stop_clears_everything(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)
        engine.run(1000)

        engine.stop()

        assert engine.is_playing is False
        assert engine.particles == []
        assert engine.timers == {}

        engine.play()
        assert "event" in engine.timers


class TestRun:
    def test_run_counts_spawned_and_completed(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, seed=1)

        completed = engine.run(3000, frame_ms=50)

        assert engine.elapsed_ms == pytest.approx(3000)
        assert engine.spawned_count == 6
        assert engine.completed_count == len(completed)
        assert engine.completed_count > 0
        assert engine.spawned_count == engine.completed_count + len(engine.particles)

    def test_run_rejects_non_positive_frame(self, scenario_topology):
        engine = AnimationEngine(scenario_topology)
        with pytest.raises(ValueError):
            engine.run(1000, frame_ms=0)

    def test_same_seed_same_result(self):
        dsl = "A -> B\nA -> C\nB -> D\nC -> D"

        def snapshot():
            engine = engine_for(dsl, edge_selection="random", seed=5)
            engine.run(4000, frame_ms=20)
            return [(p.id, p.edge_index, round(p.progress, 9)) for p in engine.particles]

        assert snapshot() == snapshot()

    def test_edge_selection_from_argument(self, scenario_topology):
        engine = AnimationEngine(scenario_topology, edge_selection="random")
        assert engine.simulator.edge_selection == EdgeSelection.RANDOM

    def test_render_hook_called_every_tick(self, scenario_topology):
        frames = []
        engine = AnimationEngine(scenario_topology, render_hook=lambda e: frames.append(e.elapsed_ms))

        engine.run(100, frame_ms=25)

        assert frames == [25, 50, 75, 100]
