from dataclasses import dataclass, field
from typing import List, Optional

from eventflow.compiler.types import Layout
from eventflow.ir.topology import Topology
from eventflow.ir.validation import ValidationResult


@dataclass
class PipelineContext:
    # Raw input (authoritative)
    dsl_text: str

    topology: Optional[Topology] = None
    validation: Optional[ValidationResult] = None
    layout: Optional[Layout] = None

    errors: List[str] = field(default_factory=list)

    @property
    def parse_errors(self):
        return self.topology.errors if self.topology else []

    def add_error(self, message: str):
        self.errors.append(message)
