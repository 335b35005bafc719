from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ClientError(Exception):
    """Raise from a client or controller to answer with an error page."""

    status_code: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


class ConfigurationError(ClientError):
    """Misconfiguration an operator has to fix; never retried per request."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(status_code=500, code="configuration_error", message=message, details=details)


class InvariantViolation(ConfigurationError):
    """A resolved value is inconsistent with the configuration it came from."""


def abort_client(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> None:
    """Convenience wrapper."""
    raise ClientError(status_code=status_code, code=code, message=message, details=details)
