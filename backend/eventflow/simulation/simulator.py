"""
Particle Simulator - moves event particles across a laid-out topology.

Per particle:

    traveling --(arrive, delay > 0)--> parked --(countdown <= 0)--+
        ^  |                                                     |
        |  +--(arrive, no delay)--+                              |
        |                         v                              v
        +-------------- next edge found? --- no ---> completed

Arrival at a node applies, in order: the node's transformation (shape and
colour of its output event type), the deprecated ``transform`` /
``transformColor`` attributes, then the itinerary step's own overrides.
"""

import itertools
import logging
import random
from typing import Dict, List, Optional

from eventflow.compiler.edges import bezier_point
from eventflow.compiler.types import Layout
from eventflow.ir.topology import EventShape, FlowEvent, Node, Topology, Transformation
from eventflow.simulation.particles import DelayedParticle, EdgeSelection, Particle, ParticleState

logger = logging.getLogger(__name__)

BASE_SPEED = 0.0008  # progress per ms at speed 1


class ParticleSimulator:
    def __init__(
        self,
        topology: Topology,
        layout: Layout,
        edge_selection: EdgeSelection = EdgeSelection.FIRST,
        rng: Optional[random.Random] = None,
    ):
        self.topology = topology
        self.layout = layout
        self.edge_selection = EdgeSelection(edge_selection)
        self.rng = rng or random.Random()

        self.particles: List[Particle] = []
        self.delayed: List[DelayedParticle] = []

        self._nodes: Dict[str, Node] = topology.node_map()
        self._transformations: Dict[str, Transformation] = {t.name: t for t in topology.transformations}
        self._ids = itertools.count(1)

    # ============================================================
    # Edge choice
    # ============================================================

    def choose(self, candidates: List):
        """Pick one of several candidates with the configured policy."""
        if not candidates:
            return None
        if self.edge_selection == EdgeSelection.RANDOM:
            return self.rng.choice(candidates)
        return candidates[0]

    def _any_outgoing(self, node_id: str) -> int:
        choice = self.choose(self.layout.outgoing(node_id))
        return -1 if choice is None else choice

    # ============================================================
    # Spawning
    # ============================================================

    def add_particle(self, event: FlowEvent, start_node_id: str) -> Optional[Particle]:
        """Spawn a particle at ``start_node_id``. Returns None when nothing leaves it."""
        edge_index = -1
        # -1 until the particle reaches path[0]
        path_index = -1
        path = event.path

        if path and len(path) > 1:
            for index, step in enumerate(path[:-1]):
                if step.node_id == start_node_id:
                    path_index = index
                    edge_index = self.layout.find_edge(start_node_id, path[index + 1].node_id)
                    break

        if edge_index < 0:
            edge_index = self._any_outgoing(start_node_id)
        if edge_index < 0:
            return None

        start = self.layout.edges[edge_index].from_point
        particle = Particle.spawn(
            particle_id=f"p{next(self._ids)}",
            event=event,
            edge_index=edge_index,
            path_index=path_index,
            x=start.x,
            y=start.y,
        )
        self.particles.append(particle)
        return particle

    # ============================================================
    # Node effects
    # ============================================================

    def _apply_transformation(self, particle: Particle, name: Optional[str]):
        transformation = self._transformations.get(name) if name else None
        if transformation is None:
            return

        output = self.topology.find_event_type(transformation.output)
        if output is not None:
            particle.event.shape = output.shape
            particle.event.color = output.color

    def _apply_node(self, particle: Particle, node_id: str):
        node = self._nodes.get(node_id)
        if node is None:
            return

        attrs = node.attributes
        self._apply_transformation(particle, attrs.transformation)
        if attrs.transform:
            particle.event.shape = attrs.transform
        if attrs.transform_color:
            particle.event.color = attrs.transform_color

    def _apply_step(self, particle: Particle, step_index: int):
        attributes = particle.event.path[step_index].attributes
        if not attributes:
            return

        self._apply_transformation(particle, attributes.get("transformation"))
        if attributes.get("shape"):
            particle.event.shape = EventShape(attributes["shape"])
        if attributes.get("color"):
            particle.event.color = attributes["color"]

    def node_delay(self, node_id: str) -> float:
        """A node's own delay, else the delay of its transformation."""
        node = self._nodes.get(node_id)
        if node is None:
            return 0.0
        if node.attributes.delay is not None:
            return node.attributes.delay

        transformation = self._transformations.get(node.attributes.transformation or "")
        return transformation.delay if transformation else 0.0

    # ============================================================
    # Next edge
    # ============================================================

    def next_edge(self, particle: Particle, node_id: str) -> int:
        """Resolve the edge a particle takes from ``node_id``; -1 for a sink."""
        path = particle.event.path

        if path:
            cursor = particle.path_index
            step_index = -1

            if cursor + 1 < len(path) and path[cursor + 1].node_id == node_id:
                step_index = cursor + 1
            else:
                # Arrived off-itinerary: resync at a later occurrence
                for index in range(cursor + 1, len(path)):
                    if path[index].node_id == node_id:
                        step_index = index
                        break

            if step_index >= 0:
                particle.path_index = step_index
                self._apply_step(particle, step_index)

                if step_index + 1 < len(path):
                    edge_index = self.layout.find_edge(node_id, path[step_index + 1].node_id)
                    if edge_index >= 0:
                        return edge_index

        return self._any_outgoing(node_id)

    def _arrive(self, particle: Particle, node_id: str) -> bool:
        """Apply node effects and move onto the next edge. False when completed."""
        self._apply_node(particle, node_id)
        edge_index = self.next_edge(particle, node_id)

        if edge_index < 0:
            particle.state = ParticleState.COMPLETED
            logger.debug("Particle %s (%s) completed at %s", particle.id, particle.event.name, node_id)
            return False

        edge = self.layout.edges[edge_index]
        particle.edge_index = edge_index
        particle.progress = 0.0
        particle.x, particle.y = edge.from_point.x, edge.from_point.y
        particle.state = ParticleState.TRAVELING
        return True

    # ============================================================
    # Tick
    # ============================================================

    def update(self, delta_ms: float, speed: float = 1.0) -> List[Particle]:
        """Advance every particle by ``delta_ms``. Returns particles that completed."""
        completed: List[Particle] = []
        resumed: List[Particle] = []
        scaled = delta_ms * speed

        # Parked first; reverse order keeps indices valid while removing
        for i in range(len(self.delayed) - 1, -1, -1):
            delayed = self.delayed[i]
            delayed.remaining -= scaled
            if delayed.remaining > 0:
                continue

            del self.delayed[i]
            particle = delayed.particle
            if self._arrive(particle, delayed.node_id):
                resumed.append(particle)
            else:
                completed.append(particle)

        for i in range(len(self.particles) - 1, -1, -1):
            particle = self.particles[i]

            if not 0 <= particle.edge_index < len(self.layout.edges):
                particle.state = ParticleState.COMPLETED
                del self.particles[i]
                completed.append(particle)
                continue

            edge = self.layout.edges[particle.edge_index]
            particle.progress += BASE_SPEED * scaled

            position = bezier_point(edge.path, min(particle.progress, 1.0))
            particle.x, particle.y = position.x, position.y

            if particle.progress < 1:
                continue

            delay = self.node_delay(edge.target)
            if delay > 0:
                del self.particles[i]
                particle.state = ParticleState.PARKED
                self.delayed.append(
                    DelayedParticle(particle=particle, node_id=edge.target, remaining=delay, total=delay)
                )
            elif not self._arrive(particle, edge.target):
                del self.particles[i]
                completed.append(particle)

        # Resumed particles start moving on the next tick
        self.particles.extend(reversed(resumed))
        return completed

    def clear(self):
        self.particles = []
        self.delayed = []

    @property
    def active_count(self) -> int:
        return len(self.particles) + len(self.delayed)
