"""Error taxonomy for the rule engine.

A rule returning False is NOT an error. It is reported through the validator's
result and error list. Everything here signals a programming or wiring defect.
"""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Serializable error shape for callers that surface engine errors."""

    code: str
    message: str
    details: dict[str, Any] = {}


class RuleKeeperError(Exception):
    """Base exception for rulekeeper."""

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


class ConfigurationError(RuleKeeperError):
    """Rule set or registry was wired incorrectly."""

    def __init__(self, message: str = "Invalid rule configuration", details: Optional[dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class DuplicateValidatorError(ConfigurationError):
    """A validator for this model type is already registered."""

    def __init__(self, model_type: type):
        self.model_type = model_type
        super().__init__(
            f"A validator for '{model_type.__name__}' is already registered",
            {"model_type": model_type.__qualname__},
        )


class EvaluationError(RuleKeeperError):
    """A rule predicate raised while being evaluated."""

    def __init__(self, rule_key: str, message: Optional[str] = None):
        self.rule_key = rule_key
        super().__init__(
            "EVALUATION_ERROR",
            message or f"Rule '{rule_key}' raised during evaluation",
            {"rule_key": rule_key},
        )


class TypeMismatchError(RuleKeeperError):
    """A type-erased validator was narrowed to the wrong model type."""

    def __init__(self, expected: type, actual: type):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "TYPE_MISMATCH",
            f"Validator is bound to '{actual.__name__}', not '{expected.__name__}'",
            {"expected": expected.__qualname__, "actual": actual.__qualname__},
        )


class NotFoundError(RuleKeeperError):
    """No validator is registered for the requested model type."""

    def __init__(self, model_type: type):
        self.model_type = model_type
        super().__init__(
            "NOT_FOUND",
            f"No validator registered for '{model_type.__name__}'",
            {"model_type": model_type.__qualname__},
        )
