"""
Validation module for parsed topologies.
"""

from eventflow.validation.topology_validator import TopologyValidator, validate_topology

__all__ = ["TopologyValidator", "validate_topology"]
