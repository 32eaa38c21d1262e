"""Validator registry — looks validators up by the model type they are bound to.

Usage:
    register_validators(PersonRules(), OrderRules())

    validator = validator_registry.get_validator(Person)
    validator_registry.evaluate(person)
"""

import threading
from typing import Any, Optional, TypeVar

import structlog

from rulekeeper.config import get_settings
from rulekeeper.errors import DuplicateValidatorError, NotFoundError, TypeMismatchError
from rulekeeper.rules.base import RulesDefinition
from rulekeeper.rules.models import RuleError
from rulekeeper.validator import Validator

logger = structlog.get_logger()

T = TypeVar("T")


class ValidatorHandle:
    """Type-erased wrapper around a validator of any model type.

    Callers that know the model type get the typed validator back with
    narrow(); callers that don't can still evaluate through the handle.
    """

    def __init__(self, validator: Validator[Any]):
        self._validator = validator

    @property
    def model_type(self) -> type:
        return self._validator.model_type

    def narrow(self, model_type: type[T]) -> Validator[T]:
        """Recover the typed validator.

        Raises:
            TypeMismatchError: the wrapped validator is bound to another type
        """
        if self._validator.model_type is not model_type:
            raise TypeMismatchError(expected=model_type, actual=self._validator.model_type)
        return self._validator

    def evaluate(self, model: Any) -> bool:
        return self._validator.evaluate(model)

    @property
    def errors(self) -> list[RuleError]:
        return self._validator.errors

    def __repr__(self) -> str:
        return f"ValidatorHandle({self._validator!r})"


class ValidatorRegistry:
    """Thread-safe map of model type to validator.

    Duplicate registrations follow ``on_duplicate``: "reject" raises
    DuplicateValidatorError, "replace" swaps the old validator out.
    """

    def __init__(self, on_duplicate: Optional[str] = None):
        policy = on_duplicate or get_settings().DUPLICATE_VALIDATOR_POLICY
        if policy not in ("reject", "replace"):
            raise ValueError(f"Unknown duplicate policy '{policy}', use 'reject' or 'replace'")
        self.on_duplicate = policy
        self._handles: dict[type, ValidatorHandle] = {}
        self._lock = threading.RLock()

    def add(self, validator: Validator[Any]) -> None:
        """Register a validator under its bound model type."""
        model_type = validator.model_type
        with self._lock:
            if model_type in self._handles:
                if self.on_duplicate == "reject":
                    raise DuplicateValidatorError(model_type)
                logger.warning("validator_replaced", model_type=model_type.__name__)
            self._handles[model_type] = ValidatorHandle(validator)

        logger.debug("validator_registered", model_type=model_type.__name__)

    def add_definition(self, definition: RulesDefinition[Any], **validator_kwargs) -> Validator[Any]:
        """Build a validator from a rules definition and register it."""
        validator = Validator(definition, **validator_kwargs)
        self.add(validator)
        return validator

    def remove(self, model_type: type) -> None:
        """Unregister the validator for a model type.

        Raises:
            NotFoundError: nothing is registered for the type
        """
        with self._lock:
            if model_type not in self._handles:
                raise NotFoundError(model_type)
            del self._handles[model_type]

    def get_handle(self, model_type: type) -> ValidatorHandle:
        with self._lock:
            handle = self._handles.get(model_type)
        if handle is None:
            raise NotFoundError(model_type)
        return handle

    def get_validator(self, model_type: type[T]) -> Validator[T]:
        """Look up the typed validator for a model type.

        Raises:
            NotFoundError: nothing is registered for the type
        """
        return self.get_handle(model_type).narrow(model_type)

    def evaluate(self, model: Any) -> bool:
        """Evaluate a model with the validator registered for its exact type."""
        return self.get_handle(type(model)).evaluate(model)

    def model_types(self) -> list[type]:
        with self._lock:
            return list(self._handles)

    def __contains__(self, model_type: object) -> bool:
        with self._lock:
            return model_type in self._handles

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)


def register_validators(
    *definitions: RulesDefinition[Any],
    registry: Optional[ValidatorRegistry] = None,
) -> ValidatorRegistry:
    """Build and register one validator per definition.

    Args:
        definitions: Rules definitions, one per model type
        registry: Target registry. If None, uses the module-level registry.

    Returns:
        The registry the validators were added to
    """
    target = registry if registry is not None else validator_registry
    for definition in definitions:
        target.add_definition(definition)
    return target


# Module-level singleton
validator_registry = ValidatorRegistry()
