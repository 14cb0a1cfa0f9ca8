"""
Helper utilities for input validation.

This module provides validators for Chilean identification numbers (RUT),
level-based password rules and minutely two-factor codes.
"""

from .rut import (
    RutFailure,
    RutValidationResult,
    calculate_verification_digit,
    clean_rut,
    diagnose_rut,
    format_rut,
    is_ambiguous,
    is_valid_rut,
    validate_rut,
)
from .password import (
    PasswordMatchResult,
    PasswordValidationResult,
    ValidationError,
    ValidationErrorType,
    is_valid_password,
    passwords_match,
    validate_password,
    validate_password_match,
)
from .two_factor import generate_minutely_two_factor

__all__ = [
    "RutFailure",
    "RutValidationResult",
    "calculate_verification_digit",
    "clean_rut",
    "diagnose_rut",
    "format_rut",
    "is_ambiguous",
    "is_valid_rut",
    "validate_rut",
    "PasswordMatchResult",
    "PasswordValidationResult",
    "ValidationError",
    "ValidationErrorType",
    "is_valid_password",
    "passwords_match",
    "validate_password",
    "validate_password_match",
    "generate_minutely_two_factor",
]
