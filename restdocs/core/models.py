"""Domain models for documented HTTP operations.

All models in this module use only Python standard library types,
so the core never depends on a particular HTTP client. Client adapters
convert their own request/response objects into these models.
"""

import codecs
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit


def content_charset(content_type: str | None, default: str = "utf-8") -> str:
    """Extract the charset parameter from a Content-Type value.

    Charsets Python has no codec for fall back to ``default``.
    """
    if not content_type:
        return default
    for param in content_type.split(";")[1:]:
        key, _, value = param.strip().partition("=")
        if key.lower() == "charset" and value:
            charset = value.strip().strip('"')
            try:
                codecs.lookup(charset)
            except LookupError:
                return default
            return charset
    return default


class HttpHeaders:
    """Ordered, multi-valued HTTP headers.

    Names keep the casing they were created with; lookups ignore case.
    Instances are immutable: modifying methods return new instances.
    """

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._items: tuple[tuple[str, str], ...] = tuple(
            (str(name), str(value)) for name, value in items
        )

    @classmethod
    def of(cls, headers: Mapping[str, str]) -> "HttpHeaders":
        return cls(headers.items())

    def items(self) -> tuple[tuple[str, str], ...]:
        return self._items

    def names(self) -> list[str]:
        """Distinct header names in first-seen order."""
        seen: dict[str, str] = {}
        for name, _ in self._items:
            seen.setdefault(name.lower(), name)
        return list(seen.values())

    def get_all(self, name: str) -> list[str]:
        lookup = name.lower()
        return [value for key, value in self._items if key.lower() == lookup]

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self.get_all(name)
        return values[0] if values else default

    def add(self, name: str, value: str) -> "HttpHeaders":
        return HttpHeaders((*self._items, (name, value)))

    def set(self, name: str, value: str) -> "HttpHeaders":
        """Replace all values of ``name`` with ``value``, keeping its position."""
        lookup = name.lower()
        items: list[tuple[str, str]] = []
        replaced = False
        for key, existing in self._items:
            if key.lower() != lookup:
                items.append((key, existing))
            elif not replaced:
                items.append((key, value))
                replaced = True
        if not replaced:
            items.append((name, value))
        return HttpHeaders(items)

    def remove(self, *names: str) -> "HttpHeaders":
        lookups = {name.lower() for name in names}
        return HttpHeaders(
            (key, value) for key, value in self._items if key.lower() not in lookups
        )

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return bool(self.get_all(name))

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpHeaders):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"HttpHeaders({list(self._items)!r})"


class Parameters:
    """Ordered, multi-valued request parameters (query string and form body)."""

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._items: tuple[tuple[str, str], ...] = tuple(
            (str(name), str(value)) for name, value in items
        )

    def items(self) -> tuple[tuple[str, str], ...]:
        return self._items

    def names(self) -> list[str]:
        return list(dict.fromkeys(name for name, _ in self._items))

    def get_all(self, name: str) -> list[str]:
        return [value for key, value in self._items if key == name]

    def add(self, name: str, value: str) -> "Parameters":
        return Parameters((*self._items, (name, value)))

    def set(self, name: str, value: str) -> "Parameters":
        return self.remove(name).add(name, value)

    def remove(self, *names: str) -> "Parameters":
        return Parameters(item for item in self._items if item[0] not in names)

    def to_query_string(self) -> str:
        return urlencode(self._items)

    def unique_to(self, uri: str) -> "Parameters":
        """Parameters that do not already appear in ``uri``'s query string.

        Used to tell form body parameters apart from query parameters.
        """
        in_query = set(parse_qsl(urlsplit(uri).query, keep_blank_values=True))
        return Parameters(item for item in self._items if item not in in_query)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"Parameters({list(self._items)!r})"


@dataclass(frozen=True)
class RequestCookie:
    """A cookie sent with a request."""

    name: str
    value: str


@dataclass(frozen=True)
class OperationRequestPart:
    """A single part of a multipart request."""

    name: str
    content: bytes = b""
    headers: HttpHeaders = field(default_factory=HttpHeaders)
    submitted_file_name: str | None = None

    def __post_init__(self) -> None:
        """Validate part invariants on creation."""
        if not self.name:
            raise ValueError("request part name must be a non-empty string")

    @property
    def content_as_string(self) -> str:
        charset = content_charset(self.headers.get("Content-Type"))
        return self.content.decode(charset, errors="replace")


@dataclass(frozen=True)
class OperationRequest:
    """The client-agnostic representation of a documented request."""

    method: str
    uri: str
    headers: HttpHeaders = field(default_factory=HttpHeaders)
    content: bytes = b""
    parameters: Parameters = field(default_factory=Parameters)
    parts: tuple[OperationRequestPart, ...] = ()
    cookies: tuple[RequestCookie, ...] = ()
    url_template: str | None = None

    def __post_init__(self) -> None:
        """Normalize the method and validate the URI."""
        if not self.method or not self.method.strip():
            raise ValueError("method must be a non-empty string")
        object.__setattr__(self, "method", self.method.upper())
        parsed = urlsplit(self.uri)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"uri must be absolute, got {self.uri!r}")

    @property
    def content_as_string(self) -> str:
        charset = content_charset(self.headers.get("Content-Type"))
        return self.content.decode(charset, errors="replace")

    def with_changes(self, **changes: Any) -> "OperationRequest":
        return replace(self, **changes)


@dataclass(frozen=True)
class OperationResponse:
    """The client-agnostic representation of a documented response."""

    status: int
    headers: HttpHeaders = field(default_factory=HttpHeaders)
    content: bytes = b""

    def __post_init__(self) -> None:
        """Validate response invariants on creation."""
        if not 100 <= self.status <= 599:
            raise ValueError(f"status must be a valid HTTP status code, got {self.status}")

    @property
    def content_as_string(self) -> str:
        charset = content_charset(self.headers.get("Content-Type"))
        return self.content.decode(charset, errors="replace")

    def with_changes(self, **changes: Any) -> "OperationResponse":
        return replace(self, **changes)


@dataclass(frozen=True)
class RestDocumentationContext:
    """Where and for which test an operation is being documented."""

    test_class: str
    test_method_name: str
    step_count: int
    output_directory: Path

    def __post_init__(self) -> None:
        """Validate context invariants on creation."""
        if self.step_count < 1:
            raise ValueError(f"step_count must be positive, got {self.step_count}")


@dataclass(frozen=True)
class Operation:
    """A documented request/response exchange.

    ``name`` is the operation identifier with placeholders resolved; it is
    also the name of the directory the snippets are written to.
    """

    name: str
    request: OperationRequest
    response: OperationResponse
    attributes: dict[str, Any] | MappingProxyType[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert attributes dict to read-only proxy."""
        if isinstance(self.attributes, dict):
            object.__setattr__(
                self, "attributes", MappingProxyType(self.attributes)
            )
