"""Rules definition — abstract supplier of the ordered rule set for one model type.

Each definition is a standalone, independently testable unit. A validator asks
it for rules exactly once, at construction.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Optional, TypeVar

from rulekeeper.rules.models import Rule, RuleError

T = TypeVar("T")


class RulesDefinition(ABC, Generic[T]):
    """Abstract base for rule definitions.

    Contract:
        - model_type is the class the rules are written against
        - get_rules() returns rules in evaluation order; a rule's
          preconditions should be declared before it
        - Predicates are pure: they read the model and return a bool
    """

    @property
    @abstractmethod
    def model_type(self) -> type[T]:
        """Model class these rules validate."""
        ...

    @abstractmethod
    def get_rules(self) -> list[Rule[T]]:
        """Build the ordered rule set."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    # ── Helper Methods ──

    def rule(
        self,
        accept: Callable[[T], bool],
        key: Optional[str] = None,
        message: Optional[str] = None,
        property_name: Optional[str] = None,
        preconditions: Iterable[str] = (),
    ) -> Rule[T]:
        """Convenience method to create a Rule."""
        error = RuleError(property_name=property_name, message=message) if message is not None else None
        return Rule(
            accept,
            key=key,
            error=error,
            preconditions=preconditions,
            property_name=property_name,
        )
