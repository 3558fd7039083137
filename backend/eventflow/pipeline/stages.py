from eventflow.compiler.layout import compute_layout
from eventflow.dsl.parser import parse_dsl
from eventflow.ir.validation import ValidationResult
from eventflow.pipeline.context import PipelineContext
from eventflow.pipeline.stage import PipelineStage
from eventflow.validation.topology_validator import validate_topology


class ParseStage(PipelineStage):
    """
    DSL text -> Topology. Syntax errors stay on the topology and never
    stop the pipeline.
    """

    name = "parse"

    def run(self, context: PipelineContext) -> ValidationResult:
        context.topology = parse_dsl(context.dsl_text)
        return ValidationResult.success()


class ValidationStage(PipelineStage):
    """
    Referential integrity check. Only stops the pipeline in strict mode.
    """

    name = "validate"

    def __init__(self, strict: bool = False):
        self.strict = strict

    def run(self, context: PipelineContext) -> ValidationResult:
        if context.topology is None:
            return ValidationResult.failure(["No topology to validate"])

        result = validate_topology(context.topology)
        context.validation = result

        if self.strict:
            return result
        return ValidationResult.success()


class LayoutStage(PipelineStage):
    name = "layout"

    def run(self, context: PipelineContext) -> ValidationResult:
        if context.topology is None:
            return ValidationResult.failure(["No topology to lay out"])

        context.layout = compute_layout(context.topology)
        return ValidationResult.success()
