"""
Topology Validator - referential integrity of a parsed topology.

Checks:
- Edge endpoints exist as nodes
- Event sources exist as nodes
- Flow event types are declared
- Transformation input/output events are declared
- Node transformation references exist
- Subsystem members exist as nodes

Every check runs; the result lists every violation, not just the first.
"""

import logging
from typing import List, Set

from eventflow.ir.topology import Topology
from eventflow.ir.validation import ValidationResult

logger = logging.getLogger(__name__)


class TopologyValidator:
    """
    Usage:
        result = TopologyValidator().validate(topology)
        if not result.valid:
            for message in result.errors:
                ...
    """

    def validate(self, topology: Topology) -> ValidationResult:
        node_ids = {node.id for node in topology.nodes}
        event_names = {e.name for e in topology.event_types} | {e.name for e in topology.events}

        errors: List[str] = []
        errors.extend(self._check_edges(topology, node_ids))
        errors.extend(self._check_event_sources(topology, node_ids))
        errors.extend(self._check_flow_event_types(topology))
        errors.extend(self._check_transformations(topology, event_names))
        errors.extend(self._check_node_transformations(topology))
        errors.extend(self._check_subsystems(topology, node_ids))

        if errors:
            logger.info("Topology validation failed with %d errors", len(errors))
            return ValidationResult.failure(errors)
        return ValidationResult.success()

    def _check_edges(self, topology: Topology, node_ids: Set[str]) -> List[str]:
        errors = []
        for edge in topology.edges:
            if edge.source not in node_ids:
                errors.append(f"Edge references unknown node: {edge.source}")
            if edge.target not in node_ids:
                errors.append(f"Edge references unknown node: {edge.target}")
        return errors

    def _check_event_sources(self, topology: Topology, node_ids: Set[str]) -> List[str]:
        errors = []
        for event in topology.event_types + topology.events:
            if event.source and event.source not in node_ids:
                errors.append(f'Event "{event.name}" references unknown source: {event.source}')
        # The same declaration can appear as both an event type and an event
        return list(dict.fromkeys(errors))

    def _check_flow_event_types(self, topology: Topology) -> List[str]:
        declared = {e.name for e in topology.event_types}
        errors = []
        for event in topology.events:
            if event.event_type and event.event_type not in declared:
                errors.append(f'Flow "{event.name}" references unknown event: {event.event_type}')
        return errors

    def _check_transformations(self, topology: Topology, event_names: Set[str]) -> List[str]:
        errors = []
        for t in topology.transformations:
            if t.input and t.input not in event_names:
                errors.append(f'Transformation "{t.name}" references unknown input event: {t.input}')
            if t.output and t.output not in event_names:
                errors.append(f'Transformation "{t.name}" references unknown output event: {t.output}')
        return errors

    def _check_node_transformations(self, topology: Topology) -> List[str]:
        known = {t.name for t in topology.transformations}
        errors = []
        for node in topology.nodes:
            ref = node.attributes.transformation
            if ref and ref not in known:
                errors.append(f'Node "{node.id}" references unknown transformation: {ref}')
        return errors

    def _check_subsystems(self, topology: Topology, node_ids: Set[str]) -> List[str]:
        errors = []
        for subsystem in topology.subsystems:
            for node_id in subsystem.nodes:
                if node_id not in node_ids:
                    errors.append(f'Subsystem "{subsystem.name}" references unknown node: {node_id}')
        return errors


def validate_topology(topology: Topology) -> ValidationResult:
    """Convenience function to validate a topology."""
    return TopologyValidator().validate(topology)
