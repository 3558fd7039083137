"""Pytest configuration and fixtures."""

import random

import pytest

from eventflow.compiler.layout import compute_layout
from eventflow.dsl.parser import parse_dsl
from eventflow.simulation.particles import EdgeSelection
from eventflow.simulation.simulator import ParticleSimulator

SCENARIO_DSL = "A: service\nB: service\nA -> B"


@pytest.fixture
def scenario_topology():
    """Two declared services joined by one edge, no events."""
    return parse_dsl(SCENARIO_DSL)


@pytest.fixture
def make_simulator():
    """Build a ParticleSimulator straight from DSL text."""

    def _make(dsl: str, edge_selection=EdgeSelection.FIRST, seed: int = 7):
        topology = parse_dsl(dsl)
        layout = compute_layout(topology)
        return ParticleSimulator(
            topology,
            layout,
            edge_selection=edge_selection,
            rng=random.Random(seed),
        )

    return _make
