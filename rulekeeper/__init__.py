"""rulekeeper — predicate rule evaluation with precondition-aware skipping.

Usage:
    from rulekeeper import RulesDefinition, Validator

    class PersonRules(RulesDefinition[Person]):
        model_type = Person

        def get_rules(self):
            return [
                self.rule(lambda p: bool(p.first_name), key="has_name",
                          property_name="first_name", message="First name is required"),
                self.rule(lambda p: "a" in p.first_name.lower(), preconditions=["has_name"],
                          property_name="first_name", message="First name must contain an 'a'"),
            ]

    validator = Validator(PersonRules())
    if not validator.evaluate(person):
        ...  # inspect validator.errors
"""

from rulekeeper.errors import (
    ConfigurationError,
    DuplicateValidatorError,
    EvaluationError,
    NotFoundError,
    RuleKeeperError,
    TypeMismatchError,
)
from rulekeeper.rules import (
    EvaluationOutcome,
    EvaluationReport,
    Rule,
    RuleError,
    RuleEvaluator,
    RuleOutcome,
    RuleResult,
    RulesDefinition,
)
from rulekeeper.services import (
    ValidatorHandle,
    ValidatorRegistry,
    register_validators,
    validator_registry,
)
from rulekeeper.validator import Validator

__all__ = [
    "ConfigurationError",
    "DuplicateValidatorError",
    "EvaluationError",
    "NotFoundError",
    "RuleKeeperError",
    "TypeMismatchError",
    "EvaluationOutcome",
    "EvaluationReport",
    "Rule",
    "RuleError",
    "RuleEvaluator",
    "RuleOutcome",
    "RuleResult",
    "RulesDefinition",
    "ValidatorHandle",
    "ValidatorRegistry",
    "register_validators",
    "validator_registry",
    "Validator",
]
