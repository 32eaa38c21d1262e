"""Rule evaluator — runs a rule set against a model, honoring preconditions.

Rules are evaluated in declared order. A rule is attempted only when every key
in its ``preconditions`` names a rule that has already PASSED in this pass;
otherwise it is SKIPPED and its predicate never runs. Prerequisite rules must
therefore be declared before the rules that depend on them.

Usage:
    evaluator = RuleEvaluator()
    all_passed, failures = evaluator.evaluate(model, rules)
"""

import time
from typing import Optional, Sequence

import structlog

from rulekeeper.errors import ConfigurationError, EvaluationError
from rulekeeper.rules.models import EvaluationOutcome, Rule, RuleError, RuleResult

logger = structlog.get_logger()


class RuleEvaluator:
    """Evaluates ordered rule sets.

    Unknown precondition keys skip the dependent rule by default. With
    ``strict=True`` they raise ConfigurationError instead.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def evaluate(self, model, rules: Sequence[Rule]) -> EvaluationOutcome:
        """Evaluate every rule against the model.

        Args:
            model: Instance handed to each rule predicate
            rules: Rules in declaration order

        Returns:
            EvaluationOutcome of (all_passed, failures in rule order)

        Raises:
            EvaluationError: a predicate raised; the original exception is chained
            ConfigurationError: strict mode and a precondition key is unknown
        """
        start_time = time.perf_counter()

        assign_missing_keys(rules)
        for rule in rules:
            rule._record(RuleResult.NOT_EVALUATED)

        lookup = {rule.key: rule for rule in rules}
        failures: list[RuleError] = []

        for rule in rules:
            blocker = self._blocking_precondition(rule, lookup)
            if blocker is not None:
                rule._record(RuleResult.SKIPPED)
                logger.debug("rule_skipped", rule=rule.key, precondition=blocker)
                continue

            try:
                accepted = rule.accept(model)
            except Exception as e:
                logger.error(
                    "rule_predicate_failed",
                    rule=rule.key,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise EvaluationError(rule.key) from e

            if accepted:
                rule._record(RuleResult.PASSED)
            else:
                rule._record(RuleResult.FAILED)
                failures.append(rule.error)

        duration = (time.perf_counter() - start_time) * 1000
        counts = {result.value: 0 for result in RuleResult}
        for rule in rules:
            counts[rule.result.value] += 1

        logger.debug(
            "rule_evaluation_complete",
            passed=not failures,
            total_rules=len(rules),
            summary=counts,
            duration_ms=round(duration, 3),
        )

        return EvaluationOutcome(all_passed=not failures, failures=failures)

    def _blocking_precondition(self, rule: Rule, lookup: dict[str, Rule]) -> Optional[str]:
        """Return the first precondition key that has not passed, or None."""
        for key in rule.preconditions:
            prerequisite = lookup.get(key)
            if prerequisite is None:
                if self.strict:
                    raise ConfigurationError(
                        f"Rule '{rule.key}' depends on unknown rule '{key}'",
                        {"rule_key": rule.key, "precondition": key},
                    )
                return key
            if prerequisite.result != RuleResult.PASSED:
                return key
        return None


def assign_missing_keys(rules: Sequence[Rule]) -> None:
    """Give unkeyed rules a positional key (``rule_<index>``) that no other rule uses."""
    taken = {rule.key for rule in rules if rule.has_key}
    for index, rule in enumerate(rules):
        if rule.has_key:
            continue
        key = f"rule_{index}"
        suffix = 1
        while key in taken:
            key = f"rule_{index}_{suffix}"
            suffix += 1
        rule._assign_key(key)
        taken.add(key)


def check_rule_set(rules: Sequence[Rule], strict: bool = False, enforce_order: bool = False) -> None:
    """Check the structure of a keyed rule set before it is used.

    Duplicate keys always raise. ``strict`` also rejects unknown precondition
    keys, ``enforce_order`` rejects preconditions that are not declared earlier.

    Raises:
        ConfigurationError: on the first violation found
    """
    positions: dict[str, int] = {}
    for index, rule in enumerate(rules):
        if rule.key in positions:
            raise ConfigurationError(
                f"Duplicate rule key '{rule.key}'",
                {"rule_key": rule.key, "positions": [positions[rule.key], index]},
            )
        positions[rule.key] = index

    if not (strict or enforce_order):
        return

    for index, rule in enumerate(rules):
        for key in rule.preconditions:
            position = positions.get(key)
            if position is None:
                if strict:
                    raise ConfigurationError(
                        f"Rule '{rule.key}' depends on unknown rule '{key}'",
                        {"rule_key": rule.key, "precondition": key},
                    )
                continue
            if enforce_order and position >= index:
                raise ConfigurationError(
                    f"Rule '{rule.key}' depends on '{key}', which is not declared before it",
                    {"rule_key": rule.key, "precondition": key},
                )
