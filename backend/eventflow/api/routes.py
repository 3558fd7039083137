import logging

from fastapi import APIRouter, HTTPException, Response

from eventflow.api.serializers import (
    serialize_delayed,
    serialize_ir,
    serialize_layout,
    serialize_particle,
)
from eventflow.compiler.render_mermaid import render_mermaid
from eventflow.dsl.parser import parse_dsl
from eventflow.pipeline.controller import PipelineController
from eventflow.renderer.svg_renderer import SvgRenderer
from eventflow.renderer.symbols import SymbolCache
from eventflow.samples.sample_flows import get_example, list_examples
from eventflow.schemas import DSLRequest, RenderRequest, SimulateRequest
from eventflow.simulation.engine import AnimationEngine

logger = logging.getLogger(__name__)

router = APIRouter()

# One cache for the process; the renderer itself holds no global state
symbol_cache = SymbolCache()


def _parse_errors(topology):
    return [serialize_ir(e) for e in topology.errors]


@router.get("/health")
def health():
    return {"status": "ok"}


# ============================================================
# EXAMPLES
# ============================================================

@router.get("/examples")
def examples():
    return {"status": "success", "examples": list_examples()}


@router.get("/examples/{name}")
def example(name: str):
    dsl = get_example(name)
    if dsl is None:
        raise HTTPException(status_code=404, detail=f"Example '{name}' not found")
    return {"status": "success", "name": name, "dsl": dsl}


# ============================================================
# PARSE / VALIDATE / LAYOUT
# ============================================================

@router.post("/parse")
def parse(request: DSLRequest):
    try:
        topology = parse_dsl(request.dsl)
        return {
            "status": "warning" if topology.errors else "success",
            "topology": serialize_ir(topology),
            "errors": _parse_errors(topology),
        }
    except Exception as e:
        logger.exception("Parse failed")
        return {"status": "error", "message": str(e)}


@router.post("/validate")
def validate(request: DSLRequest):
    try:
        context = PipelineController().run(request.dsl)
        result = context.validation
        return {
            "status": "success" if result.valid else "invalid",
            "valid": result.valid,
            "errors": result.errors,
            "parse_errors": _parse_errors(context.topology),
        }
    except Exception as e:
        logger.exception("Validation failed")
        return {"status": "error", "message": str(e)}


@router.post("/layout")
def layout(request: DSLRequest):
    try:
        context = PipelineController().run(request.dsl)
        return {
            "status": "warning" if context.parse_errors or context.errors else "success",
            **serialize_layout(context.layout),
            "errors": _parse_errors(context.topology) + context.errors,
        }
    except Exception as e:
        logger.exception("Layout failed")
        return {"status": "error", "message": str(e)}


# ============================================================
# SIMULATION
# ============================================================

@router.post("/simulate")
def simulate(request: SimulateRequest):
    try:
        context = PipelineController().run(request.dsl)
        engine = AnimationEngine(
            context.topology,
            context.layout,
            edge_selection=request.edge_selection,
            seed=request.seed,
        )
        engine.set_speed(request.speed)
        engine.run(request.duration_ms, request.frame_ms)

        return {
            "status": "warning" if context.parse_errors else "success",
            "elapsed_ms": engine.elapsed_ms,
            "speed": engine.speed,
            "spawned": engine.spawned_count,
            "completed": engine.completed_count,
            "particles": [serialize_particle(p) for p in engine.particles],
            "delayed": [serialize_delayed(d) for d in engine.delayed],
            "errors": _parse_errors(context.topology),
        }
    except Exception as e:
        logger.exception("Simulation failed")
        return {"status": "error", "message": str(e)}


# ============================================================
# EXPORT
# ============================================================

@router.post("/export/mermaid")
def export_mermaid(request: DSLRequest):
    try:
        topology = parse_dsl(request.dsl)
        return {
            "status": "warning" if topology.errors else "success",
            "mermaid": render_mermaid(topology),
            "errors": _parse_errors(topology),
        }
    except Exception as e:
        logger.exception("Mermaid export failed")
        return {"status": "error", "mermaid": "", "message": str(e)}


@router.post("/render/svg")
def render_svg(request: RenderRequest):
    context = PipelineController().run(request.dsl)
    engine = AnimationEngine(context.topology, context.layout, seed=request.seed)
    if request.duration_ms > 0:
        engine.run(request.duration_ms, request.frame_ms)

    svg = SvgRenderer(symbol_cache).render(
        context.topology,
        context.layout,
        engine.particles,
        engine.delayed,
    )
    return Response(svg, media_type="image/svg+xml")
