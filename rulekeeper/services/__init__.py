"""Services — validator lookup by model type."""

from rulekeeper.services.registry import (
    ValidatorHandle,
    ValidatorRegistry,
    register_validators,
    validator_registry,
)

__all__ = [
    "ValidatorHandle",
    "ValidatorRegistry",
    "register_validators",
    "validator_registry",
]
