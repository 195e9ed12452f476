"""Per-request context used by the webhook pipeline."""

from typing import Any, Protocol

from fastapi import Request

RAW_BODY_KEY = "raw_body"


class RequestContext(Protocol):
    """The slice of a request the decoder and verifier are allowed to touch."""

    def set_internal(self, key: str, value: Any) -> None: ...

    def get_internal(self, key: str, default: Any = None) -> Any: ...

    def get_header(self, name: str) -> list[str]:
        """Every value sent for the header, in order. Empty when absent."""
        ...


class StarletteContext:
    """
    RequestContext backed by a Starlette request.

    Internal values live on ``request.state``, away from query and path
    parameters, so route code cannot mistake them for client input.
    """

    def __init__(self, request: Request):
        self._request = request

    def set_internal(self, key: str, value: Any) -> None:
        setattr(self._request.state, key, value)

    def get_internal(self, key: str, default: Any = None) -> Any:
        return getattr(self._request.state, key, default)

    def get_header(self, name: str) -> list[str]:
        # Starlette header lookup is already case-insensitive
        return self._request.headers.getlist(name)


class MemoryContext:
    """Dict-backed RequestContext for use outside an HTTP request."""

    def __init__(self, headers: dict[str, str | list[str]] | None = None):
        self._headers: dict[str, list[str]] = {}
        for name, value in (headers or {}).items():
            values = [value] if isinstance(value, str) else list(value)
            self._headers.setdefault(name.lower(), []).extend(values)
        self._internal: dict[str, Any] = {}

    def set_internal(self, key: str, value: Any) -> None:
        self._internal[key] = value

    def get_internal(self, key: str, default: Any = None) -> Any:
        return self._internal.get(key, default)

    def get_header(self, name: str) -> list[str]:
        return list(self._headers.get(name.lower(), []))
