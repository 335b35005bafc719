from __future__ import annotations

from typing import Any, Iterable, Mapping

from shopfront.app.common.errors import abort_client


def require_params(params: Mapping[str, Any], names: Iterable[str]) -> None:
    missing = [n for n in names if params.get(n) in (None, "")]
    if missing:
        abort_client(400, "validation_error", "Missing required parameters", {"missing": missing})


def to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
