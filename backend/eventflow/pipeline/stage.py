from abc import ABC, abstractmethod

from eventflow.ir.validation import ValidationResult
from eventflow.pipeline.context import PipelineContext


class PipelineStage(ABC):
    name: str

    @abstractmethod
    def run(self, context: PipelineContext) -> ValidationResult:
        """
        Must:
        - read from context
        - write to context
        - NEVER call other stages
        """
        pass
