"""Rule models — the rule value, its error payload, result states and reports."""

from enum import Enum
from typing import Callable, Generic, Iterable, NamedTuple, Optional, TypeVar, Union

from pydantic import BaseModel, Field

from rulekeeper.errors import ConfigurationError

T = TypeVar("T")


class RuleResult(str, Enum):
    """Outcome recorded for a rule during an evaluation pass."""

    NOT_EVALUATED = "not_evaluated"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"  # A precondition did not pass, predicate never ran


class RuleError(BaseModel):
    """Error attached to a rule, reported when its predicate returns False."""

    property_name: Optional[str] = None
    message: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        if self.property_name:
            return f"{self.property_name}: {self.message}"
        return self.message


class Rule(Generic[T]):
    """A named predicate over a model, with an error and optional preconditions.

    Everything except ``result`` is fixed at construction. ``result`` is written
    by the evaluator only.
    """

    def __init__(
        self,
        accept: Optional[Callable[[T], bool]],
        key: Optional[str] = None,
        error: Union[RuleError, str, None] = None,
        preconditions: Iterable[str] = (),
        property_name: Optional[str] = None,
    ):
        if accept is None:
            raise ConfigurationError(
                "Rule requires an accept predicate",
                {"rule_key": key},
            )
        if not callable(accept):
            raise ConfigurationError(
                f"Rule accept predicate must be callable, got {type(accept).__name__}",
                {"rule_key": key},
            )

        if isinstance(error, str):
            error = RuleError(property_name=property_name, message=error)
        if isinstance(preconditions, str):
            preconditions = (preconditions,)

        self._accept = accept
        self._key = key
        self._error = error
        self._preconditions = tuple(dict.fromkeys(preconditions))
        self._property_name = property_name
        self._result = RuleResult.NOT_EVALUATED

    @property
    def key(self) -> Optional[str]:
        return self._key

    @property
    def accept(self) -> Callable[[T], bool]:
        return self._accept

    @property
    def error(self) -> RuleError:
        if self._error is None:
            return RuleError(property_name=self._property_name, message=f"Rule '{self._key}' failed")
        return self._error

    @property
    def preconditions(self) -> tuple[str, ...]:
        return self._preconditions

    @property
    def result(self) -> RuleResult:
        return self._result

    @property
    def has_key(self) -> bool:
        return self._key is not None

    def _assign_key(self, key: str) -> None:
        """Give an unkeyed rule its auto-generated key."""
        if self._key is not None:
            raise ConfigurationError(
                f"Rule already has key '{self._key}'",
                {"rule_key": self._key},
            )
        self._key = key

    def copy(self) -> "Rule[T]":
        """Return an unevaluated rule with the same key, predicate, error and preconditions."""
        return Rule(
            self._accept,
            key=self._key,
            error=self._error,
            preconditions=self._preconditions,
            property_name=self._property_name,
        )

    def _record(self, result: RuleResult) -> None:
        self._result = result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        if self._key is None or other._key is None:
            return self is other
        return self._key == other._key

    def __hash__(self) -> int:
        if self._key is None:
            return id(self)
        return hash(self._key)

    def __repr__(self) -> str:
        return (
            f"Rule(key={self._key!r}, preconditions={list(self._preconditions)!r}, "
            f"result={self._result.value!r})"
        )


class EvaluationOutcome(NamedTuple):
    """Result of one evaluator pass: overall verdict plus failures in rule order."""

    all_passed: bool
    failures: list[RuleError]


class RuleOutcome(BaseModel):
    """Per-rule diagnostic entry."""

    key: str
    result: RuleResult
    error: Optional[RuleError] = None  # Only set for failed rules


class EvaluationReport(BaseModel):
    """Diagnostic view of the most recent evaluation pass."""

    passed: bool
    errors: list[RuleError] = Field(default_factory=list)
    outcomes: list[RuleOutcome] = Field(default_factory=list)
    summary: dict[str, int] = Field(
        default_factory=lambda: {result.value: 0 for result in RuleResult},
        description="Count of rules by result",
    )
    duration_ms: float = 0.0
    completed: bool = True  # False when a predicate raised mid-pass

    @classmethod
    def build(
        cls,
        rules: Iterable[Rule],
        errors: list[RuleError],
        duration_ms: float = 0.0,
        completed: bool = True,
    ) -> "EvaluationReport":
        """Build a report from rules that have just been evaluated.

        ``completed`` is False when the pass was cut short by a predicate fault;
        such a report never counts as passed.
        """
        summary = {result.value: 0 for result in RuleResult}
        outcomes = []
        for rule in rules:
            summary[rule.result.value] += 1
            outcomes.append(RuleOutcome(
                key=rule.key,
                result=rule.result,
                error=rule.error if rule.result == RuleResult.FAILED else None,
            ))

        return cls(
            passed=completed and summary[RuleResult.FAILED.value] == 0,
            completed=completed,
            errors=list(errors),
            outcomes=outcomes,
            summary=summary,
            duration_ms=round(duration_ms, 3),
        )
