from eventflow.pipeline.context import PipelineContext
from eventflow.pipeline.controller import PipelineController
from eventflow.pipeline.stage import PipelineStage
from eventflow.pipeline.stages import LayoutStage, ParseStage, ValidationStage

__all__ = [
    "LayoutStage",
    "ParseStage",
    "PipelineContext",
    "PipelineController",
    "PipelineStage",
    "ValidationStage",
]
