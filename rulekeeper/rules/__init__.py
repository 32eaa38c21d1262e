"""Rules — rule values, the rules-definition base class and the evaluator."""

from rulekeeper.rules.base import RulesDefinition
from rulekeeper.rules.evaluator import RuleEvaluator, assign_missing_keys, check_rule_set
from rulekeeper.rules.models import (
    EvaluationOutcome,
    EvaluationReport,
    Rule,
    RuleError,
    RuleOutcome,
    RuleResult,
)

__all__ = [
    "RulesDefinition",
    "RuleEvaluator",
    "assign_missing_keys",
    "check_rule_set",
    "EvaluationOutcome",
    "EvaluationReport",
    "Rule",
    "RuleError",
    "RuleOutcome",
    "RuleResult",
]
