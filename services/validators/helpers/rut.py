"""
RUT (Rol Único Tributario) normalization and validation for Chile.

This module provides utilities to clean, validate and format Chilean tax
identification numbers (RUT) using the official módulo 11 algorithm.

Every public function accepts arbitrary input and never raises: malformed
values are reported as ``False``, ``None`` or an empty string.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import structlog


logger = structlog.get_logger(__name__)

# A canonical RUT is bounded to 20 characters (body + DV)
MIN_RUT_LENGTH = 2
MAX_RUT_LENGTH = 20

# Unseparated RUTs with a body this short are rejected as ambiguous:
# "19713741" may be 1971374-1 or an 8-digit body missing its DV
AMBIGUOUS_MAX_DIGITS = 7

MULTIPLIERS = (2, 3, 4, 5, 6, 7)

_CLEAN_PATTERN = re.compile(r'[.\-\s]')
_BODY_PATTERN = re.compile(r'[0-9]+')
_RUT_PATTERN = re.compile(r'([0-9]+)([0-9K])')
_MALFORMED_SEPARATORS = ('--', '..', '.-', '-.')


class RutFailure(str, Enum):
    """First rule a RUT failed, as reported by ``diagnose_rut``."""

    MALFORMED_SEPARATOR = "MALFORMED_SEPARATOR"
    TOO_SHORT = "TOO_SHORT"
    TOO_LONG = "TOO_LONG"
    INVALID_FORMAT = "INVALID_FORMAT"
    CHECKSUM_UNAVAILABLE = "CHECKSUM_UNAVAILABLE"
    AMBIGUOUS = "AMBIGUOUS"
    CHECKSUM_MISMATCH = "CHECKSUM_MISMATCH"
    NON_REPRESENTABLE = "NON_REPRESENTABLE"


@dataclass(frozen=True)
class RutValidationResult:
    """
    Detailed outcome of ``validate_rut``.

    ``formatted``, ``rut_number`` and ``verification_digit`` are only set
    when ``is_valid`` is True.
    """
    is_valid: bool
    raw: str
    formatted: Optional[str] = None
    rut_number: Optional[str] = None
    verification_digit: Optional[str] = None

    def to_dict(self) -> dict:
        """Render the result using the camelCase keys expected by API clients."""
        result = {
            "isValid": self.is_valid,
            "formatted": self.formatted,
            "raw": self.raw,
        }
        if self.is_valid:
            result["rutNumber"] = self.rut_number
            result["verificationDigit"] = self.verification_digit
        return result


def to_text(value: Any) -> str:
    """
    Convert any input to its textual form without ever raising.

    Examples:
        >>> to_text(None)
        ''
        >>> to_text(True)
        'true'
        >>> to_text(123456785.0)
        '123456785'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    try:
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if value.is_integer():
                return str(int(value))
            return repr(value)
        return str(value)
    except Exception:
        # Huge ints exceed the interpreter digit limit for str()
        return ""


def clean_rut(rut: Any) -> str:
    """
    Remove dots, hyphens and whitespace from a RUT and upper-case it.

    Args:
        rut: RUT in any format (string, number or anything else)

    Returns:
        Canonical RUT string, empty when the input has no textual form

    Examples:
        >>> clean_rut("12.345.678-5")
        '123456785'
        >>> clean_rut("7.654.316-k")
        '7654316K'
        >>> clean_rut(None)
        ''
    """
    return _CLEAN_PATTERN.sub('', to_text(rut)).upper()


def calculate_verification_digit(rut_number: Any) -> str:
    """
    Calculate the verification digit (DV) of a RUT body using módulo 11.

    The Chilean RUT algorithm:
    1. Multiply each digit (from right to left) by sequence 2,3,4,5,6,7,2,3,4...
    2. Sum all products
    3. Calculate 11 - (sum % 11)
    4. If result is 11, DV is 0; if 10, DV is K; otherwise DV is the result

    Args:
        rut_number: RUT body without DV (digits only)

    Returns:
        The DV ("0"-"9" or "K"), or "" when the body is not 1-20 digits

    Examples:
        >>> calculate_verification_digit("12345678")
        '5'
        >>> calculate_verification_digit("7654316")
        'K'
        >>> calculate_verification_digit("12A34")
        ''
    """
    body = to_text(rut_number)
    if not _BODY_PATTERN.fullmatch(body) or len(body) > MAX_RUT_LENGTH:
        return ""

    total = 0
    for i, digit in enumerate(reversed(body)):
        total += int(digit) * MULTIPLIERS[i % len(MULTIPLIERS)]

    expected_dv = 11 - (total % 11)

    if expected_dv == 11:
        return "0"
    if expected_dv == 10:
        return "K"
    return str(expected_dv)


def has_malformed_separators(text: str) -> bool:
    """Check for doubled or mixed adjacent separators such as "--" or ".-"."""
    return any(sequence in text for sequence in _MALFORMED_SEPARATORS)


def has_separator(text: str) -> bool:
    """Check whether the original input carries a dot or hyphen."""
    return '.' in text or '-' in text


def is_ambiguous(
    original: str,
    rut_number: str,
    max_digits: int = AMBIGUOUS_MAX_DIGITS,
) -> bool:
    """
    Decide whether an unseparated RUT is unsafe to split into body and DV.

    Without a separator, "19713741" could be the body 1971374 with DV 1 or
    an 8-digit body with no DV at all. Bodies of ``max_digits`` or fewer
    digits are rejected unless the original input had a dot or hyphen.

    Args:
        original: Input text before cleaning
        rut_number: Candidate body after splitting off the DV
        max_digits: Longest body length considered ambiguous

    Returns:
        True if the input must be rejected as ambiguous
    """
    return not has_separator(original) and len(rut_number) <= max_digits


def _split_rut(cleaned: str) -> Optional[tuple[str, str]]:
    match = _RUT_PATTERN.fullmatch(cleaned)
    if not match:
        return None
    return match.group(1), match.group(2)


def _check(rut: Any) -> Optional[RutFailure]:
    original = to_text(rut)
    if has_malformed_separators(original):
        return RutFailure.MALFORMED_SEPARATOR

    if original == "" and rut is not None and not isinstance(rut, str):
        return RutFailure.NON_REPRESENTABLE

    cleaned = clean_rut(rut)
    if len(cleaned) < MIN_RUT_LENGTH:
        return RutFailure.TOO_SHORT
    if len(cleaned) > MAX_RUT_LENGTH:
        return RutFailure.TOO_LONG

    parts = _split_rut(cleaned)
    if parts is None:
        return RutFailure.INVALID_FORMAT
    rut_number, verification_digit = parts

    if len(rut_number) > MAX_RUT_LENGTH:
        return RutFailure.TOO_LONG

    expected_dv = calculate_verification_digit(rut_number)
    if not expected_dv:
        return RutFailure.CHECKSUM_UNAVAILABLE

    if is_ambiguous(original, rut_number):
        return RutFailure.AMBIGUOUS

    if expected_dv != verification_digit:
        return RutFailure.CHECKSUM_MISMATCH

    return None


def diagnose_rut(rut: Any) -> Optional[RutFailure]:
    """
    Report which validation rule a RUT fails first.

    Args:
        rut: RUT in any format

    Returns:
        The failing rule, or None if the RUT is valid

    Examples:
        >>> diagnose_rut("12.345.678-5") is None
        True
        >>> diagnose_rut("19713741")
        <RutFailure.AMBIGUOUS: 'AMBIGUOUS'>
    """
    try:
        failure = _check(rut)
    except Exception as e:
        logger.debug("RUT check failed unexpectedly", error=str(e), error_type=type(e).__name__)
        return RutFailure.NON_REPRESENTABLE

    if failure is not None:
        logger.debug("RUT rejected", reason=failure.value)
    return failure


def is_valid_rut(rut: Any) -> bool:
    """
    Validate a RUT using the módulo 11 algorithm.

    Inputs with 7 or fewer body digits and no dot or hyphen are always
    rejected as ambiguous, even if the checksum would match.

    Args:
        rut: RUT in any format

    Returns:
        True if the RUT is valid

    Examples:
        >>> is_valid_rut("12.345.678-5")
        True
        >>> is_valid_rut("1971374-1")
        True
        >>> is_valid_rut("19713741")
        False
    """
    return diagnose_rut(rut) is None


def _group_thousands(rut_number: str) -> str:
    groups = []
    remaining = rut_number
    while len(remaining) > 3:
        groups.insert(0, remaining[-3:])
        remaining = remaining[:-3]
    groups.insert(0, remaining)
    return '.'.join(groups)


def format_rut(rut: Any) -> Optional[str]:
    """
    Format a valid RUT with thousands dots and a hyphen before the DV.

    Args:
        rut: RUT in any format

    Returns:
        Formatted RUT like "12.345.678-5", or None if the RUT is invalid

    Examples:
        >>> format_rut("123456785")
        '12.345.678-5'
        >>> format_rut("1-9")
        '1-9'
    """
    if not is_valid_rut(rut):
        return None

    parts = _split_rut(clean_rut(rut))
    if parts is None:
        return None

    rut_number, verification_digit = parts
    return f"{_group_thousands(rut_number)}-{verification_digit}"


def validate_rut(rut: Any) -> RutValidationResult:
    """
    Validate a RUT and return its parsed parts.

    Args:
        rut: RUT in any format

    Returns:
        RutValidationResult; parsed fields are None when invalid

    Examples:
        >>> validate_rut("7654316-K").formatted
        '7.654.316-K'
        >>> validate_rut("12.345.678-9").is_valid
        False
    """
    cleaned = clean_rut(rut)
    parts = _split_rut(cleaned)

    if not is_valid_rut(rut) or parts is None:
        return RutValidationResult(is_valid=False, raw=cleaned)

    rut_number, verification_digit = parts
    return RutValidationResult(
        is_valid=True,
        raw=cleaned,
        formatted=format_rut(rut),
        rut_number=rut_number,
        verification_digit=verification_digit,
    )
