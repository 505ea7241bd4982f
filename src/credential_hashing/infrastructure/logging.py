"""Process logging configuration with masking of credential material."""

from __future__ import annotations

import logging
import re

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_SENSITIVE_WORDS = ("password", "salt", "credential", "secret")
_SENSITIVE_PATTERN = re.compile(
    r"\b(?P<key>\w*(?:" + "|".join(_SENSITIVE_WORDS) + r")\w*)"
    r"=(?P<value>'[^']*'|\"[^\"]*\"|\S+)",
    re.IGNORECASE,
)
_MASK = "***"


class SensitiveValueFilter(logging.Filter):
    """Mask `key=value` fields whose key names credential material."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _SENSITIVE_PATTERN.sub(lambda match: f"{match.group('key')}={_MASK}", message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def configure_logging(*, level: str) -> None:
    """Configure process logging with consistent format, runtime level and masking."""

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved_level = getattr(logging, normalized_level, logging.INFO)

    handler = logging.StreamHandler()
    handler.addFilter(SensitiveValueFilter())
    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
        handlers=[handler],
    )
