from __future__ import annotations

from typing import Dict, List, Optional

from core.traits.models import FitnessResult, ValidationResult


class TraitEngineError(Exception):
    """Base class for terminal verification failures."""


class PreconditionError(TraitEngineError):
    """Source documents are missing, too short, templated or duplicated."""

    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        super().__init__("; ".join(self.errors) or "precondition failed")


class TraitValidationError(TraitEngineError):
    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__("; ".join(result.errors) or "trait validation failed")


class SuspiciousFitnessBlock(TraitEngineError):
    """
    The fitness guard refused the vector. Never adjusted or clamped:
    callers must reject the registration and raise an audit alert.
    """

    def __init__(self, result: FitnessResult, traits: Dict[str, float]):
        self.result = result
        self.traits = dict(traits)
        super().__init__(result.reason or "suspicious fitness")
