from __future__ import annotations

import contextvars
from typing import Any, Dict

_fields: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("tracker_log_fields", default={})


def get_context() -> Dict[str, Any]:
    return dict(_fields.get())


def _merged(values: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(_fields.get())
    merged.update({k: v for k, v in values.items() if v is not None})
    return merged


def bind(**values: Any) -> None:
    """Bind fields until the current task ends."""
    _fields.set(_merged(values))


class context(object):
    """Bind fields (player, cycle, ...) for the duration of a block.

    Each asyncio task runs in its own copy of the context, so pool
    workers never see each other's bindings.
    """

    def __init__(self, **values: Any) -> None:
        self._values = values
        self._token: contextvars.Token | None = None

    def __enter__(self) -> Dict[str, Any]:
        fields = _merged(self._values)
        self._token = _fields.set(fields)
        return fields

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._token is not None:
            _fields.reset(self._token)
            self._token = None
        return False
