"""Validator — binds a rules definition to a model type and evaluates models.

Usage:
    validator = Validator(PersonRules())
    if not validator.evaluate(person):
        for error in validator.errors:
            print(error.property_name, error.message)

A validator keeps per-rule results and the last error list on the instance, so
one instance must not be evaluated from several threads at once. Validators are
cheap; build one per concurrent caller.
"""

import time
from typing import Generic, Optional, TypeVar

import structlog

from rulekeeper.config import get_settings
from rulekeeper.rules.base import RulesDefinition
from rulekeeper.rules.evaluator import RuleEvaluator, assign_missing_keys, check_rule_set
from rulekeeper.rules.models import EvaluationReport, Rule, RuleError, RuleResult

logger = structlog.get_logger()

T = TypeVar("T")


class Validator(Generic[T]):
    """Evaluates models of one type against a fixed rule set."""

    def __init__(
        self,
        definition: RulesDefinition[T],
        evaluator: Optional[RuleEvaluator] = None,
        strict: Optional[bool] = None,
        enforce_order: Optional[bool] = None,
    ):
        """Build the rule set once from the definition.

        Args:
            definition: Supplier of the model type and ordered rules
            evaluator: Optional evaluator. If None, one is built with ``strict``.
            strict: Reject unknown precondition keys. Defaults to settings.
            enforce_order: Reject preconditions not declared earlier. Defaults to settings.

        Raises:
            ConfigurationError: duplicate keys, or a strict/order violation
        """
        settings = get_settings()
        if strict is None:
            strict = settings.STRICT_PRECONDITIONS
        if enforce_order is None:
            enforce_order = settings.ENFORCE_DECLARATION_ORDER

        self._model_type = definition.model_type
        # Copies, so result state is never shared with other validators
        self._rules: tuple[Rule[T], ...] = tuple(rule.copy() for rule in definition.get_rules())
        assign_missing_keys(self._rules)
        check_rule_set(self._rules, strict=strict, enforce_order=enforce_order)

        self._evaluator = evaluator or RuleEvaluator(strict=strict)
        self._errors: list[RuleError] = []
        self._report: Optional[EvaluationReport] = None
        self._duration_ms = 0.0
        self._completed = True

        logger.debug(
            "validator_created",
            definition=definition.name,
            model_type=self._model_type.__name__,
            total_rules=len(self._rules),
        )

    @property
    def model_type(self) -> type[T]:
        return self._model_type

    @property
    def rules(self) -> tuple[Rule[T], ...]:
        return self._rules

    @property
    def errors(self) -> list[RuleError]:
        """Errors from the most recent evaluate() call, in rule order."""
        return list(self._errors)

    def get_errors(self) -> list[RuleError]:
        return self.errors

    def evaluate(self, model: T) -> bool:
        """Evaluate the model, replacing any previous errors.

        Returns:
            True if no rule failed. Skipped rules do not count as failures.

        Raises:
            EvaluationError: a rule predicate raised
        """
        self._errors = []
        self._report = None
        self._completed = False

        start_time = time.perf_counter()
        all_passed, failures = self._evaluator.evaluate(model, self._rules)
        self._duration_ms = (time.perf_counter() - start_time) * 1000

        self._errors = failures
        self._completed = True
        return all_passed

    def results(self) -> dict[str, RuleResult]:
        """Per-rule results of the most recent evaluate() call."""
        return {rule.key: rule.result for rule in self._rules}

    def report(self) -> EvaluationReport:
        """Diagnostic report of the most recent evaluate() call."""
        if self._report is None:
            self._report = EvaluationReport.build(
                self._rules, self._errors, self._duration_ms, completed=self._completed
            )
        return self._report

    def __repr__(self) -> str:
        return f"Validator(model_type={self._model_type.__name__}, rules={len(self._rules)})"
