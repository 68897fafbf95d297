"""
Cascade — Validation Engine

Declarative conditional validation. A rule set is an ordered list of
``ValidationRule(field, predicate, message)``; a rule fires when its
predicate is true for the current form state. The engine returns a
``{field: message}`` map holding the first firing rule per field.

An empty map is the only success signal.

A predicate that raises is logged and treated as not firing, so one
malformed rule cannot block the whole form.

@file cascade/validation.py
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Mapping

logger = logging.getLogger('isp_forms')

FormState = Mapping[str, Any]
Predicate = Callable[[FormState], bool]


@dataclass(frozen=True)
class ValidationRule:
    field: str
    predicate: Predicate
    message: str


class ValidationEngine:
    """Stateless evaluator for ValidationRule lists."""

    @staticmethod
    def validate(state: FormState, rules: Iterable[ValidationRule]) -> dict[str, str]:
        errors: dict[str, str] = {}
        for rule in rules:
            if rule.field in errors:
                continue
            try:
                fired = bool(rule.predicate(state))
            except Exception:
                logger.warning(
                    'Validation rule for %r raised; treating as not fired.',
                    rule.field, exc_info=True,
                )
                continue
            if fired:
                errors[rule.field] = rule.message
        return errors

    @classmethod
    def is_valid(cls, state: FormState, rules: Iterable[ValidationRule]) -> bool:
        return not cls.validate(state, rules)


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def to_int(value) -> int | None:
    """Leading-integer parse; ``None`` when there is no number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = re.match(r'\s*([+-]?\d+)', str(value))
    return int(match.group(1)) if match else None


def to_decimal(value) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def text(state: FormState, field: str) -> str:
    value = state.get(field)
    return '' if value is None else str(value).strip()


# ---------------------------------------------------------------------------
# Rule builders
# ---------------------------------------------------------------------------

def required(field: str, message: str | None = None) -> ValidationRule:
    return ValidationRule(
        field=field,
        predicate=lambda state: is_blank(state.get(field)),
        message=message or f'{field} is required',
    )


def matches(field: str, pattern: str, message: str) -> ValidationRule:
    """Fires when a non-blank value does not match ``pattern``."""
    compiled = re.compile(pattern)

    def predicate(state):
        value = text(state, field)
        return bool(value) and compiled.match(value) is None

    return ValidationRule(field=field, predicate=predicate, message=message)


def check(field: str, predicate: Predicate, message: str) -> ValidationRule:
    return ValidationRule(field=field, predicate=predicate, message=message)


def when(condition: Predicate, *rules: ValidationRule) -> list[ValidationRule]:
    """Guard each rule so it only fires while ``condition`` holds."""
    return [
        ValidationRule(
            field=rule.field,
            predicate=_guarded(condition, rule.predicate),
            message=rule.message,
        )
        for rule in rules
    ]


def _guarded(condition: Predicate, predicate: Predicate) -> Predicate:
    return lambda state: bool(condition(state)) and bool(predicate(state))


def field_equals(field: str, expected) -> Predicate:
    return lambda state: state.get(field) == expected


def field_in(field: str, choices) -> Predicate:
    options = frozenset(choices)
    return lambda state: state.get(field) in options
