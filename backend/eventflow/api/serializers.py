from enum import Enum
from typing import Any, Dict, List

from eventflow.compiler.types import Layout
from eventflow.simulation.particles import DelayedParticle, Particle

PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def serialize_ir(obj: Any):
    """
    Serialize IR objects into JSON-compatible structures.
    Deterministic.
    Tolerant to primitives.
    """

    # Enums first: str-based enums would otherwise pass as primitives
    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, (list, tuple, set, frozenset)):
        return [serialize_ir(item) for item in obj]

    if isinstance(obj, dict):
        return {k: serialize_ir(v) for k, v in obj.items()}

    # IR / dataclass-like objects
    if hasattr(obj, "__dict__"):
        return {
            key: serialize_ir(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }

    return str(obj)


def serialize_layout(layout: Layout) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "nodes": [
            {
                "id": n.id,
                "type": n.type.value,
                "label": n.node.label,
                "x": n.x,
                "y": n.y,
                "level": n.level,
            }
            for n in layout.nodes.values()
        ],
        "edges": [
            {
                "source": e.source,
                "target": e.target,
                "from_side": e.from_side.value,
                "to_side": e.to_side.value,
                "offset_index": e.offset_index,
                "path": serialize_ir(e.path),
            }
            for e in layout.edges
        ],
    }


def serialize_particle(particle: Particle) -> Dict[str, Any]:
    return {
        "id": particle.id,
        "event": particle.event.name,
        "shape": particle.event.shape.value,
        "color": particle.event.color,
        "edge_index": particle.edge_index,
        "path_index": particle.path_index,
        "progress": particle.progress,
        "x": particle.x,
        "y": particle.y,
        "state": particle.state.value,
    }


def serialize_delayed(delayed: DelayedParticle) -> Dict[str, Any]:
    return {
        "particle": serialize_particle(delayed.particle),
        "node_id": delayed.node_id,
        "remaining": delayed.remaining,
        "total": delayed.total,
    }
