"""Per-operation documentation configuration."""

from collections.abc import Sequence
from dataclasses import dataclass

from .models import RestDocumentationContext
from .ports import OperationPreprocessor, Snippet, TemplateFormat, WriterResolverPort
from .uris import UriModifyingPreprocessor


@dataclass(frozen=True)
class UriConfiguration:
    """Overrides applied to the URIs of every documented request."""

    scheme: str | None = None
    host: str | None = None
    port: int | None = None
    remove_port: bool = False

    def __post_init__(self) -> None:
        """Validate configuration invariants on creation."""
        if self.port is not None and not 0 < self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.port is not None and self.remove_port:
            raise ValueError("Cannot both set and remove the port of documented URIs")

    @property
    def is_identity(self) -> bool:
        return (
            self.scheme is None
            and self.host is None
            and self.port is None
            and not self.remove_port
        )

    def as_preprocessor(self) -> OperationPreprocessor:
        if self.is_identity:
            return OperationPreprocessor()
        return UriModifyingPreprocessor(
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            remove_port=self.remove_port,
        )


@dataclass(frozen=True)
class SnippetConfiguration:
    """Everything a generator needs to document one operation.

    Created by the configurer for each request and handed to every
    document filter that sees the same exchange.
    """

    context: RestDocumentationContext
    writer: WriterResolverPort
    template_format: TemplateFormat
    default_snippets: Sequence[Snippet]
    uris: UriConfiguration = UriConfiguration()
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Freeze the default snippets."""
        object.__setattr__(self, "default_snippets", tuple(self.default_snippets))
