"""
Declarative form validation for the catalog forms.

A form is described by an ordered list of ``FieldRule`` objects. Each
rule names a field, a sanitizer that normalizes the submitted value and
a check run on the sanitized value. Rules are evaluated independently
and in order: every failing rule contributes one ``FieldError``, so a
blank name can report both "must be specified" and "non-alphanumeric".

``validate()`` returns ``Valid`` with the sanitized draft when no rule
fails, ``Invalid`` with the collected errors otherwise.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict


class InvalidValue(ValueError):
    """Raised by a sanitizer that cannot interpret the submitted value."""


def trim(value: Any) -> str:
    return "" if value is None else str(value).strip()


def optional_date(value: Any) -> Optional[date]:
    """Parse an ISO 8601 date; blank values mean "not given"."""
    text = trim(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidValue(text) from None


def is_present(value: Any) -> bool:
    return bool(value)


def is_alphanumeric(value: Any) -> bool:
    return isinstance(value, str) and value.isascii() and value.isalnum()


def always(value: Any) -> bool:
    return True


class FieldRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    check: Callable[[Any], bool]
    message: str
    sanitize: Callable[[Any], Any] = trim


class FieldError(BaseModel):
    field: str
    message: str
    value: Any = None


class Valid(BaseModel):
    draft: Dict[str, Any]


class Invalid(BaseModel):
    errors: List[FieldError]


ValidationResult = Union[Valid, Invalid]


def validate(rules: Sequence[FieldRule], raw: Mapping[str, Any]) -> ValidationResult:
    draft: Dict[str, Any] = {}
    errors: List[FieldError] = []

    for rule in rules:
        submitted = raw.get(rule.field)
        try:
            value = rule.sanitize(submitted)
        except InvalidValue:
            errors.append(FieldError(field=rule.field, message=rule.message, value=submitted))
            continue
        if not rule.check(value):
            errors.append(FieldError(field=rule.field, message=rule.message, value=submitted))
            continue
        draft[rule.field] = value

    if errors:
        return Invalid(errors=errors)
    return Valid(draft=draft)


AUTHOR_RULES: List[FieldRule] = [
    FieldRule(field="first_name", check=is_present,
              message="First name must be specified."),
    FieldRule(field="first_name", check=is_alphanumeric,
              message="First name has non-alphanumeric characters."),
    FieldRule(field="family_name", check=is_present,
              message="Family name must be specified."),
    FieldRule(field="family_name", check=is_alphanumeric,
              message="Family name has non-alphanumeric characters."),
    FieldRule(field="date_of_birth", check=always, sanitize=optional_date,
              message="Invalid date of birth"),
    FieldRule(field="date_of_death", check=always, sanitize=optional_date,
              message="Invalid date of death"),
]

GENRE_RULES: List[FieldRule] = [
    FieldRule(field="name", check=is_present,
              message="Genre name must be specified."),
]
