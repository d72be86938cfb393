"""Plan Validator — проверка плана расчётов перед передачей наружу."""

from .plan_validator import (
    PlanValidator,
    ValidationFailure,
    ValidationFailureReason,
    ValidationResult,
    validate,
)

__all__ = [
    "PlanValidator",
    "ValidationFailure",
    "ValidationFailureReason",
    "ValidationResult",
    "validate",
]
