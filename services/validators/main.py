"""
Main CLI module for the validators service.

Provides command-line access to the RUT, password and two-factor helpers.
Example: python -m services.validators rut 12.345.678-5
"""

import argparse
import json
import sys
from typing import List, Optional

from . import __version__
from .helpers.password import validate_password
from .helpers.rut import calculate_verification_digit, diagnose_rut, validate_rut
from .helpers.two_factor import generate_minutely_two_factor
from .log_config import configure_logging, get_logger, log_validation
from .settings import settings


logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False))


def run_rut(value: str, explain: bool = False) -> int:
    """
    Validate a RUT and print the detailed result as JSON.

    Args:
        value: RUT as typed by the user
        explain: Include the failing rule in the output

    Returns:
        Exit code (0 if valid, 1 otherwise)
    """
    result = validate_rut(value)
    payload = result.to_dict()

    failure = None
    if not result.is_valid:
        failure = diagnose_rut(value)
        if explain and failure is not None:
            payload["reason"] = failure.value

    log_validation(
        logger,
        kind="rut",
        is_valid=result.is_valid,
        reason=failure.value if failure is not None else None,
    )
    _print_json(payload)

    return EXIT_OK if result.is_valid else EXIT_INVALID


def run_dv(body: str) -> int:
    """Print the verification digit for a RUT body."""
    dv = calculate_verification_digit(body)
    if not dv:
        logger.warning("Cannot compute verification digit", body_length=len(body))
        return EXIT_INVALID

    print(dv)
    return EXIT_OK


def run_password(value: str, level: str) -> int:
    """
    Validate a password and print the result as JSON.

    Returns:
        Exit code (0 if valid, 1 otherwise)
    """
    result = validate_password(value, level)
    payload = {
        "isValid": result.is_valid,
        "level": result.level,
        "errors": [
            {"type": error.type.value, "message": error.message}
            for error in result.errors
        ],
    }

    log_validation(
        logger,
        kind="password",
        is_valid=result.is_valid,
        level=level,
        errors_count=len(result.errors),
    )
    _print_json(payload)

    return EXIT_OK if result.is_valid else EXIT_INVALID


def run_code(length: int, timezone: str) -> int:
    """Print the two-factor code for the current minute."""
    code = generate_minutely_two_factor(length, timezone=timezone)
    logger.info("Two-factor code generated", length=length, timezone=timezone)
    print(code)
    return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Chilean RUT, password and two-factor validators",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m services.validators rut 12.345.678-5
  python -m services.validators rut 19713741 --explain
  python -m services.validators dv 7654316
  python -m services.validators password 'Secret12' --level high
  python -m services.validators code --length 6
        """
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from configuration"
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Override log format from configuration"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Chilean validators {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    rut_parser = subparsers.add_parser("rut", help="Validate and format a RUT")
    rut_parser.add_argument("value", help="RUT in any format")
    rut_parser.add_argument(
        "--explain",
        action="store_true",
        help="Include the failing rule when the RUT is invalid"
    )

    dv_parser = subparsers.add_parser("dv", help="Calculate a RUT verification digit")
    dv_parser.add_argument("body", help="RUT body, digits only")

    password_parser = subparsers.add_parser("password", help="Validate a password")
    password_parser.add_argument("value", help="Password to check")
    password_parser.add_argument(
        "--level",
        choices=["low", "medium", "high"],
        help="Security level (defaults to PASSWORD_LEVEL setting)"
    )

    code_parser = subparsers.add_parser("code", help="Generate the current two-factor code")
    code_parser.add_argument(
        "--length",
        type=int,
        help="Number of digits, 4 to 8 (defaults to TWO_FACTOR_LENGTH setting)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, 1 for invalid input, 2 for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.log_level or args.log_format:
        configure_logging(args.log_level, args.log_format)

    config = settings()
    logger.debug(
        "Command starting",
        command=args.command,
        service_name=config.service_name,
        version=__version__,
        environment=config.environment,
    )

    try:
        if args.command == "rut":
            return run_rut(args.value, explain=args.explain)
        if args.command == "dv":
            return run_dv(args.body)
        if args.command == "password":
            level = args.level if args.level is not None else config.password_level
            return run_password(args.value, level)
        if args.command == "code":
            return run_code(
                args.length if args.length is not None else config.two_factor_length,
                config.two_factor_timezone,
            )
    except ValueError as e:
        logger.error(
            "Command failed",
            command=args.command,
            error=str(e),
            error_type=type(e).__name__
        )
        return EXIT_ERROR

    return EXIT_ERROR


def cli_main():
    """Synchronous entry point for setuptools console scripts."""
    return main()


if __name__ == "__main__":
    sys.exit(main())
