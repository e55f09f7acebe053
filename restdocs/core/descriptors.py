"""Descriptors documenting the parts of a request or response.

Descriptors are supplied by the caller and cross-checked by snippets
against what was actually observed in the exchange.
"""

from dataclasses import dataclass
from enum import Enum


class JsonFieldType(Enum):
    """Types a field in a JSON payload may have."""

    ARRAY = "Array"
    BOOLEAN = "Boolean"
    OBJECT = "Object"
    NUMBER = "Number"
    NULL = "Null"
    STRING = "String"
    VARIES = "Varies"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldDescriptor:
    """Documents a field of a JSON payload, identified by its path."""

    path: str
    description: str | None = None
    type: JsonFieldType | str | None = None
    optional: bool = False
    ignored: bool = False

    def __post_init__(self) -> None:
        """Validate descriptor invariants on creation."""
        if not self.path or not self.path.strip():
            raise ValueError("field path must be a non-empty string")


@dataclass(frozen=True)
class ParameterDescriptor:
    """Documents a query, form or path parameter."""

    name: str
    description: str | None = None
    optional: bool = False
    ignored: bool = False

    def __post_init__(self) -> None:
        """Validate descriptor invariants on creation."""
        if not self.name:
            raise ValueError("parameter name must be a non-empty string")


@dataclass(frozen=True)
class HeaderDescriptor:
    """Documents a request or response header."""

    name: str
    description: str | None = None
    optional: bool = False

    def __post_init__(self) -> None:
        """Validate descriptor invariants on creation."""
        if not self.name:
            raise ValueError("header name must be a non-empty string")


@dataclass(frozen=True)
class RequestPartDescriptor:
    """Documents a part of a multipart request."""

    name: str
    description: str | None = None
    optional: bool = False
    ignored: bool = False

    def __post_init__(self) -> None:
        """Validate descriptor invariants on creation."""
        if not self.name:
            raise ValueError("part name must be a non-empty string")


def field_with_path(
    path: str,
    description: str | None = None,
    *,
    type: JsonFieldType | str | None = None,
    optional: bool = False,
    ignored: bool = False,
) -> FieldDescriptor:
    """Describe the field at ``path``, e.g. ``"id"``, ``"items[].name"``."""
    return FieldDescriptor(
        path=path,
        description=description,
        type=type,
        optional=optional,
        ignored=ignored,
    )


def parameter_with_name(
    name: str,
    description: str | None = None,
    *,
    optional: bool = False,
    ignored: bool = False,
) -> ParameterDescriptor:
    return ParameterDescriptor(
        name=name, description=description, optional=optional, ignored=ignored
    )


def header_with_name(
    name: str, description: str | None = None, *, optional: bool = False
) -> HeaderDescriptor:
    return HeaderDescriptor(name=name, description=description, optional=optional)


def part_with_name(
    name: str,
    description: str | None = None,
    *,
    optional: bool = False,
    ignored: bool = False,
) -> RequestPartDescriptor:
    return RequestPartDescriptor(
        name=name, description=description, optional=optional, ignored=ignored
    )
