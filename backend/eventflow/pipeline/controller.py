import logging

from eventflow.pipeline.context import PipelineContext
from eventflow.pipeline.stages import LayoutStage, ParseStage, ValidationStage

logger = logging.getLogger(__name__)


class PipelineController:
    """
    parse -> validate -> layout over one shared context.

    A stage that returns an invalid result stops the run; its errors are
    copied onto the context.
    """

    def __init__(self, strict: bool = False):
        self.stages = [
            ParseStage(),
            ValidationStage(strict=strict),
            LayoutStage(),
        ]

    def run(self, dsl_text: str) -> PipelineContext:
        context = PipelineContext(dsl_text=dsl_text)

        for stage in self.stages:
            result = stage.run(context)

            # -------------------------------------------------
            # Hard stop on failure
            # -------------------------------------------------
            if not result.is_valid:
                logger.info("Pipeline stopped at %s stage: %s", stage.name, "; ".join(result.errors))
                for error in result.errors:
                    context.add_error(error)
                break

        return context
