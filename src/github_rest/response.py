"""Response envelope and decode destinations.

Every successful call returns its decoded body together with a Response
carrying the raw httpx response and the metadata parsed from its headers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Protocol, runtime_checkable

import httpx
from pydantic import TypeAdapter

from .rate_limit import Rate


@dataclass(frozen=True)
class Response:
    """Envelope returned alongside the result of every successful call.

    Attributes:
        raw: The underlying httpx response (body already consumed)
        pages: Relation name -> page number, from the Link header
        rate: Rate reported for this call's quota group, or None
    """

    raw: httpx.Response
    pages: dict[str, int] = field(default_factory=dict)
    rate: Rate | None = None

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def next_page(self) -> int | None:
        """Page number of the next page, or None on the last page."""
        return self.pages.get("next")

    @property
    def last_page(self) -> int | None:
        return self.pages.get("last")


@runtime_checkable
class ByteSink(Protocol):
    """Anything raw response bytes can be written to."""

    def write(self, data: bytes, /) -> Any: ...


class DestinationKind(Enum):
    """How the dispatcher treats a response body."""

    DISCARD = "discard"
    STREAM = "stream"
    DECODE = "decode"


@dataclass(frozen=True)
class Destination:
    """A decode destination resolved once per call."""

    kind: DestinationKind
    sink: IO[bytes] | ByteSink | None = None
    adapter: TypeAdapter[Any] | None = None

    @classmethod
    def resolve(cls, dest: Any) -> Destination:
        """Classify what the caller passed as destination.

        Args:
            dest: None, a writable byte sink, a TypeAdapter, or any type
                  pydantic can validate (a model, ``list[Model]``, ...)

        Returns:
            Destination describing how to consume the body
        """
        if dest is None:
            return cls(DestinationKind.DISCARD)
        if isinstance(dest, Destination):
            return dest
        if isinstance(dest, TypeAdapter):
            return cls(DestinationKind.DECODE, adapter=dest)
        if not isinstance(dest, type) and isinstance(dest, ByteSink):
            return cls(DestinationKind.STREAM, sink=dest)
        return cls(DestinationKind.DECODE, adapter=_adapter_for(dest))


_adapters: dict[Any, TypeAdapter[Any]] = {}


def _adapter_for(target: Any) -> TypeAdapter[Any]:
    """Cached TypeAdapter for a decode target."""
    try:
        return _adapters[target]
    except KeyError:
        adapter: TypeAdapter[Any] = TypeAdapter(target)
        _adapters[target] = adapter
        return adapter
    except TypeError:
        # Unhashable targets are not cached
        return TypeAdapter(target)
