"""
Field validators with canned success/failure messages.

Every validator returns the same ``ValidationOutcome`` so callers can collect
outcomes for several fields and reject a request in one go.

Example:
    from service_components.validation import validate, ensure_valid

    outcomes = [
        validate("phone_number", body.phone, field="phone"),
        validate("postal_code", body.zip, field="zip"),
    ]
    ensure_valid(outcomes)  # raises ValidationException if any failed
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from service_components.utils.exceptions import ValidationException
from service_components.validation.checksums import (
    is_valid_company_number,
    is_valid_taxpayer_number,
)

# Patterns are matched against the whole string (re.fullmatch)
PATTERNS: Dict[str, str] = {
    "phone_number": r"^(\s*)?(\+)?([-()+]?\d[- _():=+]?){5,15}(\s*)?$",
    "phone_number_code": r"^\d{6}$",
    "service_name": r"^[a-z-]{1,100}$",
    "name": r"^.{1,100}$",
    "postal_code": r"(^\d{5}(-\d{4})?$)|(^[ABCEGHJKLMNPRSTVXY]\d[A-Z][- ]*\d[A-Z]\d$)",
    "iso_country_code": r"^[A-Z]{2}$",
    "password": r"^.{8,}$",
    "company_name": r"^.{6,255}$",
}

DATE_FORMAT = "%Y-%m-%d"

_url_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one field."""

    field: Optional[str]
    passed: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "passed": self.passed, "message": self.message}


@dataclass(frozen=True)
class Validator:
    """A named check with the messages reported for success and failure."""

    name: str
    check: Callable[[Any], bool]
    success_description: str
    failure_description: str

    def validate(self, value: Any, field: Optional[str] = None) -> ValidationOutcome:
        passed = bool(self.check(value))
        description = self.success_description if passed else self.failure_description
        message = f"{field} {description}" if field else description
        return ValidationOutcome(field=field, passed=passed, message=message)

    def __call__(self, value: Any) -> bool:
        return bool(self.check(value))


def matches_pattern(pattern: str) -> Callable[[Any], bool]:
    """Build a check that fully matches a string against pattern."""
    compiled = re.compile(pattern)

    def check(value: Any) -> bool:
        return isinstance(value, str) and compiled.fullmatch(value) is not None

    return check


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def are_valid_urls(values: Any) -> bool:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        return False
    return bool(values) and all(is_valid_url(item) for item in values)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a YYYY-MM-DD string, returning None when it is not a valid date."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return None


def is_valid_date(value: Any) -> bool:
    return parse_date(value) is not None


def is_valid_birthday(value: Any) -> bool:
    date = parse_date(value)
    return date is not None and date < datetime.now()


def _pattern_validator(name: str, subject: str) -> Validator:
    return Validator(
        name=name,
        check=matches_pattern(PATTERNS[name]),
        success_description=f"is a valid {subject}",
        failure_description=f"is not a valid {subject}",
    )


phone_number = _pattern_validator("phone_number", "phone number")
phone_number_code = _pattern_validator("phone_number_code", "phone code")
service_name = _pattern_validator("service_name", "service name")
name = _pattern_validator("name", "name")
postal_code = _pattern_validator("postal_code", "postal code")
iso_country_code = _pattern_validator("iso_country_code", "ISO country code")
password = _pattern_validator("password", "password")
company_name = _pattern_validator("company_name", "company name")

company_number = Validator(
    name="company_number",
    check=is_valid_company_number,
    success_description="is a valid company registration number",
    failure_description="is not a valid company registration number",
)
taxpayer_number = Validator(
    name="taxpayer_number",
    check=is_valid_taxpayer_number,
    success_description="is a valid taxpayer identification number",
    failure_description="is not a valid taxpayer identification number",
)
url = Validator(
    name="url",
    check=is_valid_url,
    success_description="is a valid url",
    failure_description="is not a valid url",
)
array_urls = Validator(
    name="array_urls",
    check=are_valid_urls,
    success_description="has only valid URLs",
    failure_description="has an invalid URL",
)
date = Validator(
    name="date",
    check=is_valid_date,
    success_description="is a valid date",
    failure_description="is not a valid date",
)
birthday = Validator(
    name="birthday",
    check=is_valid_birthday,
    success_description="is a valid birthday",
    failure_description="is not a valid birthday",
)

VALIDATORS: Dict[str, Validator] = {
    v.name: v
    for v in (
        phone_number,
        phone_number_code,
        service_name,
        name,
        postal_code,
        iso_country_code,
        password,
        company_name,
        company_number,
        taxpayer_number,
        url,
        array_urls,
        date,
        birthday,
    )
}


def validate(validator_name: str, value: Any, field: Optional[str] = None) -> ValidationOutcome:
    """
    Run a registered validator.

    Args:
        validator_name: Key in VALIDATORS
        value: Value to check
        field: Field name used in the outcome message

    Raises:
        KeyError: If no validator is registered under validator_name
    """
    try:
        validator = VALIDATORS[validator_name]
    except KeyError:
        raise KeyError(f"Unknown validator: {validator_name}") from None
    return validator.validate(value, field=field)


def ensure_valid(outcomes: Iterable[ValidationOutcome]) -> List[ValidationOutcome]:
    """
    Raise ValidationException if any outcome failed.

    Returns:
        The outcomes, when all passed
    """
    outcomes = list(outcomes)
    failed = [o.to_dict() for o in outcomes if not o.passed]
    if failed:
        raise ValidationException(
            message="; ".join(f["message"] for f in failed),
            errors=failed,
        )
    return outcomes
