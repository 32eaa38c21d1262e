"""Shared fixtures: a small Person model and rule definitions for it."""

from typing import Optional

import pytest
import structlog
from pydantic import BaseModel

from rulekeeper import RulesDefinition, Validator
from rulekeeper.config import get_settings


class Person(BaseModel):
    first_name: str = ""
    last_name: Optional[str] = None
    age: Optional[int] = None

    model_config = {"frozen": True}


class Order(BaseModel):
    quantity: int = 0


class PersonRules(RulesDefinition[Person]):
    """First name must be present, and once present must contain an 'a'."""

    model_type = Person

    def get_rules(self):
        return [
            self.rule(
                lambda p: bool(p.first_name),
                key="r1",
                property_name="first_name",
                message="E1",
            ),
            self.rule(
                lambda p: "a" in p.first_name.lower(),
                key="r2",
                property_name="first_name",
                message="E2",
                preconditions=["r1"],
            ),
        ]


class OrderRules(RulesDefinition[Order]):
    model_type = Order

    def get_rules(self):
        return [
            self.rule(lambda o: o.quantity > 0, key="positive", property_name="quantity", message="Quantity must be positive"),
        ]


class ListRules(RulesDefinition):
    """Rules definition over an arbitrary list of pre-built rules."""

    def __init__(self, rules, model_type=Person):
        self._rules = rules
        self._model_type = model_type
        self.calls = 0

    @property
    def model_type(self):
        return self._model_type

    def get_rules(self):
        self.calls += 1
        return list(self._rules)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached process-wide; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def person_validator():
    return Validator(PersonRules())
