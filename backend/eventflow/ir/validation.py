from dataclasses import dataclass, field
from typing import List


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.valid

    @classmethod
    def success(cls):
        return cls(valid=True, errors=[])

    @classmethod
    def failure(cls, errors: List[str]):
        return cls(valid=False, errors=list(errors))
