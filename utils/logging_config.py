"""
Logging setup for the basket engine.

Root logger writes to a daily rotated file and the console. Buyer profiles
travel inside every order, so personal data is masked before any handler
formats a record.
"""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Any, Optional, Pattern

import config

LOG_FORMAT = '%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class SecretMaskingFilter(logging.Filter):
    """
    Masks credentials and buyer personal data in log records.

    Covers tokens, passwords, profile fields inside model reprs
    (display_name='...'), e-mail addresses and phone numbers. Records are
    rewritten, never dropped.
    """

    PATTERNS: list[tuple[Pattern, str]] = [
        # Credentials
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-:.]{20,})(["\']?)', re.IGNORECASE),
         r'\1[REDACTED_TOKEN]\3'),
        (re.compile(r'(Bearer\s+)([A-Za-z0-9_\-\.]+)', re.IGNORECASE), r'\1[REDACTED_BEARER_TOKEN]'),
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^\s"\']+)(["\']?)', re.IGNORECASE),
         r'\1[REDACTED_PASSWORD]\3'),

        # BuyerProfile fields, e.g. display_name='Erika Mustermann'
        (re.compile(r'((?:display_name|email_address|telephone_number|photo_url)=)([\'"])(.*?)\2'),
         r"\1'[REDACTED]'"),

        # Free text PII
        (re.compile(r'\b([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b'), '[REDACTED_EMAIL]'),
        (re.compile(r'\+\d{1,3}[\s\-/]?\d{2,5}[\s\-/]?\d{3,}(?:[\s\-]?\d+)*'), '[REDACTED_PHONE]'),
        (re.compile(r'\b(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b'), '[REDACTED_PHONE]'),
    ]

    @classmethod
    def mask(cls, text: str) -> str:
        for pattern, replacement in cls.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _mask_arg(self, arg: Any) -> Any:
        return self.mask(arg) if isinstance(arg, str) else arg

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = self.mask(str(record.msg))

        if isinstance(record.args, dict):
            record.args = {key: self._mask_arg(value) for key, value in record.args.items()}
        elif record.args:
            record.args = tuple(self._mask_arg(arg) for arg in record.args)

        return True


def _attach(root_logger: logging.Logger, handler: logging.Handler, level: int, mask_secrets: bool):
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(level)
    if mask_secrets:
        handler.addFilter(SecretMaskingFilter())
    root_logger.addHandler(handler)


def setup_logging(log_dir: Optional[str] = None):
    """
    Configure the root logger. Call once when the host application starts.

    Settings (config):
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (unknown values fall back to INFO)
    - LOG_DIR: directory of basket.log, rotated at midnight
    - LOG_RETENTION_DAYS: number of rotated files kept
    - LOG_MASK_SECRETS: attach SecretMaskingFilter to every handler
    """
    directory = Path(log_dir or getattr(config, "LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)

    level_name = getattr(config, "LOG_LEVEL", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)
    retention_days = getattr(config, "LOG_RETENTION_DAYS", 7)
    mask_secrets = getattr(config, "LOG_MASK_SECRETS", True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Calling setup twice must not duplicate output
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    _attach(root_logger, logging.handlers.TimedRotatingFileHandler(
        filename=directory / "basket.log",
        when="midnight",
        backupCount=retention_days,
        encoding="utf-8"
    ), level, mask_secrets)
    _attach(root_logger, logging.StreamHandler(), level, mask_secrets)

    logging.info(f"Logging initialized: level={level_name}, retention={retention_days} days, "
                 f"masking={'on' if mask_secrets else 'off'}, dir={directory}")
