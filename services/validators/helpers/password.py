"""
Level-based password rule validation.

Passwords are checked against one of three security levels. Every failed
rule is reported as a structured ValidationError so callers can render
their own messages.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

import structlog


logger = structlog.get_logger(__name__)

SecurityLevel = Literal["low", "medium", "high"]


class ValidationErrorType(str, Enum):
    """Identifiers for each password rule."""

    EMPTY = "EMPTY"
    TOO_SHORT = "TOO_SHORT"
    TOO_LONG = "TOO_LONG"
    MISSING_UPPERCASE = "MISSING_UPPERCASE"
    MISSING_LOWERCASE = "MISSING_LOWERCASE"
    MISSING_NUMBER = "MISSING_NUMBER"
    MISSING_SYMBOL = "MISSING_SYMBOL"
    NOT_ALPHANUMERIC = "NOT_ALPHANUMERIC"
    REPEATED_CHARS = "REPEATED_CHARS"
    NON_STRING_INPUT = "NON_STRING_INPUT"


DEFAULT_MIN_LENGTHS: Dict[str, int] = {
    "low": 6,
    "medium": 8,
    "high": 12,
}

MAX_LENGTH = 64

DEFAULT_ERROR_MESSAGES: Dict[ValidationErrorType, str] = {
    ValidationErrorType.EMPTY: "Password cannot be empty",
    ValidationErrorType.TOO_SHORT: "Password is too short",
    ValidationErrorType.TOO_LONG: "Password is too long",
    ValidationErrorType.MISSING_UPPERCASE: "At least one uppercase letter required",
    ValidationErrorType.MISSING_LOWERCASE: "At least one lowercase letter required",
    ValidationErrorType.MISSING_NUMBER: "At least one number required",
    ValidationErrorType.MISSING_SYMBOL: "At least one symbol required",
    ValidationErrorType.NOT_ALPHANUMERIC: "Only letters and numbers allowed",
    ValidationErrorType.REPEATED_CHARS: "No repeated characters (3+ consecutive)",
    ValidationErrorType.NON_STRING_INPUT: "Input must be a string",
}

# Rules per level (min length is resolved separately)
LEVEL_REQUIREMENTS: Dict[str, Dict[str, bool]] = {
    "low": {
        "require_uppercase": False,
        "require_lowercase": False,
        "require_number": False,
        "require_symbol": False,
        "only_alphanumeric": True,
    },
    "medium": {
        "require_uppercase": True,
        "require_lowercase": False,
        "require_number": False,
        "require_symbol": False,
        "only_alphanumeric": True,
    },
    "high": {
        "require_uppercase": True,
        "require_lowercase": True,
        "require_number": True,
        "require_symbol": True,
        "only_alphanumeric": False,
    },
}

UPPERCASE_PATTERN = re.compile(r'[A-Z]')
LOWERCASE_PATTERN = re.compile(r'[a-z]')
NUMBER_PATTERN = re.compile(r'[0-9]')
SYMBOL_PATTERN = re.compile(r'[!@#$%^&*()_+\[\]{};\':"\\|,.<>/?`~\-=]')
ALPHANUMERIC_PATTERN = re.compile(r'[a-zA-Z0-9]+')
REPEATED_PATTERN = re.compile(r'(.)\1{2,}')


@dataclass
class ValidationError:
    """A single failed password rule."""
    type: ValidationErrorType
    message: str
    expected_value: Optional[Union[int, str]] = None
    actual_value: Optional[Union[int, str]] = None


@dataclass
class PasswordValidationResult:
    """Outcome of ``validate_password``."""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    level: str = "medium"

    @property
    def missing(self) -> List[str]:
        """Error messages only. Deprecated: use ``errors`` instead."""
        return [error.message for error in self.errors]

    def has_error_type(self, error_type: ValidationErrorType) -> bool:
        return any(error.type == error_type for error in self.errors)

    def get_errors_by_type(self, error_type: ValidationErrorType) -> List[ValidationError]:
        return [error for error in self.errors if error.type == error_type]

    def get_custom_error_messages(
        self,
        custom_messages: Mapping[ValidationErrorType, str],
    ) -> List[str]:
        """
        Render error messages, preferring caller-provided text per error type.

        Args:
            custom_messages: Replacement messages keyed by error type

        Returns:
            One message per error, in the original order
        """
        return [custom_messages.get(error.type) or error.message for error in self.errors]


@dataclass
class PasswordMatchResult:
    """Outcome of ``validate_password_match``."""
    is_match: bool
    error: Optional[str] = None


def clean_password(password: Any) -> str:
    """Convert input to text and strip surrounding whitespace."""
    if password is None:
        return ""
    return str(password).strip()


def _create_error(
    error_type: ValidationErrorType,
    expected_value: Optional[Union[int, str]] = None,
    actual_value: Optional[Union[int, str]] = None,
    message: Optional[str] = None,
) -> ValidationError:
    return ValidationError(
        type=error_type,
        message=message or DEFAULT_ERROR_MESSAGES[error_type],
        expected_value=expected_value,
        actual_value=actual_value,
    )


def get_min_length(level: str, custom_lengths: Optional[Mapping[str, int]] = None) -> int:
    """
    Resolve the minimum length for a level.

    Args:
        level: Security level
        custom_lengths: Optional per-level overrides, e.g. {"high": 16}

    Returns:
        The override for ``level`` if given, otherwise the default

    Raises:
        ValueError: If level is not low, medium or high
    """
    if level not in DEFAULT_MIN_LENGTHS:
        raise ValueError(f"level must be one of: {', '.join(DEFAULT_MIN_LENGTHS)}")

    if custom_lengths and custom_lengths.get(level) is not None:
        return custom_lengths[level]
    return DEFAULT_MIN_LENGTHS[level]


def validate_password(
    password: Any,
    level: SecurityLevel = "medium",
    custom_lengths: Optional[Mapping[str, int]] = None,
) -> PasswordValidationResult:
    """
    Validate a password against the rules of a security level.

    Levels:
    - low: 6+ characters, letters and digits only
    - medium: 8+ characters, letters and digits only, one uppercase letter
    - high: 12+ characters, uppercase, lowercase, number and symbol

    All levels allow at most 64 characters and reject three or more
    consecutive repeated characters.

    Args:
        password: Password to check (non-strings are rejected)
        level: Security level to enforce
        custom_lengths: Optional per-level minimum length overrides

    Returns:
        PasswordValidationResult with every failed rule

    Raises:
        ValueError: If level is unknown

    Examples:
        >>> validate_password("Secret12").is_valid
        True
        >>> [e.type.value for e in validate_password("abc", "low").errors]
        ['TOO_SHORT']
    """
    min_length = get_min_length(level, custom_lengths)
    requirements = LEVEL_REQUIREMENTS[level]

    if not isinstance(password, str):
        error = _create_error(ValidationErrorType.NON_STRING_INPUT)
        return PasswordValidationResult(is_valid=False, errors=[error], level=level)

    cleaned = clean_password(password)
    if not cleaned:
        error = _create_error(ValidationErrorType.EMPTY)
        return PasswordValidationResult(is_valid=False, errors=[error], level=level)

    errors: List[ValidationError] = []

    # Length checks
    if len(cleaned) < min_length:
        errors.append(_create_error(
            ValidationErrorType.TOO_SHORT,
            min_length,
            len(cleaned),
            f"At least {min_length} characters",
        ))
    if len(cleaned) > MAX_LENGTH:
        errors.append(_create_error(
            ValidationErrorType.TOO_LONG,
            MAX_LENGTH,
            len(cleaned),
            f"Maximum {MAX_LENGTH} characters",
        ))

    # Character type checks
    if requirements["require_uppercase"] and not UPPERCASE_PATTERN.search(cleaned):
        errors.append(_create_error(
            ValidationErrorType.MISSING_UPPERCASE,
            message="At least one uppercase letter",
        ))
    if requirements["require_lowercase"] and not LOWERCASE_PATTERN.search(cleaned):
        errors.append(_create_error(
            ValidationErrorType.MISSING_LOWERCASE,
            message="At least one lowercase letter",
        ))
    if requirements["require_number"] and not NUMBER_PATTERN.search(cleaned):
        errors.append(_create_error(
            ValidationErrorType.MISSING_NUMBER,
            message="At least one number",
        ))
    if requirements["require_symbol"] and not SYMBOL_PATTERN.search(cleaned):
        errors.append(_create_error(
            ValidationErrorType.MISSING_SYMBOL,
            message="At least one symbol",
        ))

    if requirements["only_alphanumeric"] and not ALPHANUMERIC_PATTERN.fullmatch(cleaned):
        errors.append(_create_error(ValidationErrorType.NOT_ALPHANUMERIC))

    if REPEATED_PATTERN.search(cleaned):
        errors.append(_create_error(ValidationErrorType.REPEATED_CHARS))

    if errors:
        logger.debug(
            "Password rejected",
            level=level,
            error_types=[error.type.value for error in errors],
        )

    return PasswordValidationResult(is_valid=not errors, errors=errors, level=level)


def is_valid_password(
    password: Any,
    level: SecurityLevel = "medium",
    custom_lengths: Optional[Mapping[str, int]] = None,
) -> bool:
    """Simple boolean check for password validity."""
    return validate_password(password, level, custom_lengths).is_valid


def validate_password_match(password1: Any, password2: Any) -> PasswordMatchResult:
    """
    Check that a password and its confirmation are equal.

    Both values are stripped before comparing; two empty values never match.
    """
    cleaned1 = clean_password(password1)
    cleaned2 = clean_password(password2)

    is_match = bool(cleaned1) and cleaned1 == cleaned2

    return PasswordMatchResult(
        is_match=is_match,
        error=None if is_match else "Passwords do not match",
    )


def passwords_match(password1: Any, password2: Any) -> bool:
    return validate_password_match(password1, password2).is_match
