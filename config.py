import os
import sys

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

_WEEKDAYS = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")


def _fail(setting: str, reason, expected: str, default: str):
    print(f"\n ERROR: Invalid {setting} configuration\n", file=sys.stderr)
    print(f"Reason: {reason}", file=sys.stderr)
    print(f"Expected: {expected}", file=sys.stderr)
    print(f"Current value: {os.environ.get(setting, '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: {setting}={default}\n", file=sys.stderr)
    sys.exit(1)


def _parse_weekday(setting: str, default: str) -> int:
    value = os.environ.get(setting, default).strip().upper()
    try:
        return _WEEKDAYS.index(value)
    except ValueError as e:
        _fail(setting, e, f"one of {', '.join(_WEEKDAYS)}", default)


def _parse_int(setting: str, default: str, minimum: int, maximum: int) -> int:
    try:
        value = int(os.environ.get(setting, default))
        if not minimum <= value <= maximum:
            raise ValueError(f"{setting} must be between {minimum} and {maximum} (got: {value})")
        return value
    except ValueError as e:
        _fail(setting, e, f"integer between {minimum} and {maximum}", default)


# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(os.environ.get("RUNTIME_ENVIRONMENT", "DEV"))
except ValueError as e:
    _fail("RUNTIME_ENVIRONMENT", e, ", ".join(env.value for env in RuntimeEnvironment), "DEV")

LANGUAGE = os.environ.get("LANGUAGE", "en")  # en, de

# Marketplace the basket orders from
SELLER_ID = os.environ.get("SELLER_ID", "")
MARKET_ID = os.environ.get("MARKET_ID", "")
DEFAULT_BUYER_DISPLAY_NAME = os.environ.get("DEFAULT_BUYER_DISPLAY_NAME", "Kunde")  # Used when the profile can't be loaded

# Ordering schedule
# Empty TIMEZONE uses the system's local timezone
TIMEZONE = os.environ.get("TIMEZONE", "")
PICKUP_DAY = _parse_weekday("PICKUP_DAY", "THURSDAY")
DEADLINE_DAY = _parse_weekday("DEADLINE_DAY", "TUESDAY")
DEADLINE_HOUR = _parse_int("DEADLINE_HOUR", "23", 0, 23)
DEADLINE_MINUTE = _parse_int("DEADLINE_MINUTE", "59", 0, 59)
AVAILABLE_PICKUP_DATES_COUNT = _parse_int("AVAILABLE_PICKUP_DATES_COUNT", "5", 1, 52)

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask buyer PII in logs
LOG_DIR = os.environ.get("LOG_DIR", "logs")

# Log Retention: Environment-specific defaults
# Dev: keep a month for debugging
# Prod: Use 5 days default to save disk space
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))
