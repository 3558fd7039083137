from typing import Optional

from pydantic import BaseModel, Field

MAX_SIMULATION_MS = 120_000


class DSLRequest(BaseModel):
    dsl: str


class SimulateRequest(DSLRequest):
    duration_ms: float = Field(5000, ge=0, le=MAX_SIMULATION_MS)
    frame_ms: float = Field(1000 / 60, gt=0, le=1000)
    speed: float = 1.0                       # clamped to 0.25..4 by the engine
    seed: Optional[int] = None
    edge_selection: Optional[str] = Field(None, pattern="^(first|random)$")


class RenderRequest(DSLRequest):
    """Snapshot after ``duration_ms`` of simulation (0 = layout only)."""
    duration_ms: float = Field(0, ge=0, le=MAX_SIMULATION_MS)
    frame_ms: float = Field(1000 / 60, gt=0, le=1000)
    seed: Optional[int] = None
