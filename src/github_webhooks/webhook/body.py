"""JSON body decoding that keeps a byte-exact copy of the request body."""

import json
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

from github_webhooks.webhook.context import RAW_BODY_KEY, RequestContext
from github_webhooks.webhook.errors import ParseError, TooLarge

logger = logging.getLogger(__name__)

# Key that wraps top-level JSON values which are not objects
JSON_KEY = "_json"


class BodyStream:
    """
    A request body that can be read exactly once.

    The signature has to be computed over the bytes as they arrived, so
    whoever reads the stream first owns the body. A second read is a bug
    and raises instead of silently returning nothing.
    """

    def __init__(self, chunks: AsyncIterator[bytes]):
        self._chunks = chunks
        self.consumed = False

    @classmethod
    def from_bytes(cls, data: bytes) -> "BodyStream":
        """Wrap an in-memory body."""

        async def _chunks() -> AsyncIterator[bytes]:
            yield data

        return cls(_chunks())

    async def read(self, limit: int) -> bytes:
        """
        Read the whole stream into memory.

        Args:
            limit: Maximum number of bytes accepted

        Raises:
            TooLarge: If the body is longer than ``limit``
        """
        if self.consumed:
            raise RuntimeError("Request body stream has already been consumed")
        self.consumed = True

        buffer = bytearray()
        async for chunk in self._chunks:
            buffer.extend(chunk)
            if len(buffer) > limit:
                raise TooLarge(limit)
        return bytes(buffer)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding one request body."""

    payload: dict[str, Any] | None
    raw_body: bytes = b""

    @property
    def passthrough(self) -> bool:
        """True when the content type was not JSON and the body was left unread."""
        return self.payload is None


def is_json_content_type(content_type: str | None) -> bool:
    """Check for a ``json`` subtype or a ``+json`` structured syntax suffix."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    _, slash, subtype = media_type.partition("/")
    if not slash:
        return False
    return subtype == "json" or subtype.endswith("+json")


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON token: {name}")


class BodyCapturingDecoder:
    """Decode JSON request bodies and store the raw bytes on the request context."""

    def __init__(self, max_body_size: int = 8_000_000):
        self.max_body_size = max_body_size

    async def decode(
        self,
        content_type: str | None,
        stream: BodyStream,
        context: RequestContext,
    ) -> DecodeResult:
        """
        Decode a request body.

        JSON bodies are read in full before parsing. The captured bytes are
        stored under ``raw_body`` in the context's internal state. Non-JSON
        bodies are not read at all and ``raw_body`` is set to ``b""``.

        Raises:
            ParseError: If a JSON body is malformed
            TooLarge: If the body exceeds ``max_body_size``
        """
        if not is_json_content_type(content_type):
            logger.debug(f"Skipping body decode for content type: {content_type}")
            context.set_internal(RAW_BODY_KEY, b"")
            return DecodeResult(payload=None)

        try:
            raw_body = await stream.read(self.max_body_size)
        except TooLarge:
            logger.warning(f"Request body exceeds {self.max_body_size} bytes")
            context.set_internal(RAW_BODY_KEY, b"")
            raise

        payload = self._decode_json(raw_body)
        context.set_internal(RAW_BODY_KEY, raw_body)
        return DecodeResult(payload=payload, raw_body=raw_body)

    @staticmethod
    def _decode_json(raw_body: bytes) -> dict[str, Any]:
        if not raw_body:
            return {}

        try:
            value = json.loads(raw_body, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Malformed JSON body: {e}")
            raise ParseError(f"Malformed JSON body: {e}", raw_body=raw_body) from e

        if isinstance(value, dict):
            return value
        return {JSON_KEY: value}
