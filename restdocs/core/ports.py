"""Port interfaces for the REST documentation core.

These abstract base classes define the boundaries between the core
documentation logic and the adapters around it. Implementations live
in the adapters/ package, or in the core itself for snippets and
template formats.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - RequestConverterPort: Client request -> OperationRequest
   - ResponseConverterPort: Client response -> OperationResponse
   - WriterResolverPort: Persist rendered snippets
   - ContextProviderPort: Supply the per-operation test context

2. **Extension Ports** (pluggable behaviour inside the core)
   - Snippet: Render one documentation fragment for an operation
   - OperationPreprocessor: Rewrite a request/response before rendering
   - TemplateFormat: Markup used by rendered snippets
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Generic, TypeVar

from .models import (
    Operation,
    OperationRequest,
    OperationResponse,
    RestDocumentationContext,
)

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class RequestConverterPort(ABC, Generic[RequestT]):
    """Port for converting a client library's request into the core model.

    Implementations must copy faithfully: every header value in order,
    repeated query parameters, and the exact body bytes.
    """

    @abstractmethod
    def convert(self, request: RequestT) -> OperationRequest:
        """Convert a client request.

        Args:
            request: The client library's request object.

        Returns:
            The equivalent OperationRequest.

        Raises:
            Exception: Whatever the client library raises while
                materialising the request body. Not wrapped.
        """


class ResponseConverterPort(ABC, Generic[ResponseT]):
    """Port for converting a client library's response into the core model."""

    @abstractmethod
    def convert(self, response: ResponseT) -> OperationResponse:
        """Convert a client response.

        Args:
            response: The client library's response object.

        Returns:
            The equivalent OperationResponse.
        """


class WriterResolverPort(ABC):
    """Port for persisting rendered snippets."""

    @abstractmethod
    def write(
        self,
        context: RestDocumentationContext,
        operation_name: str,
        snippet_name: str,
        template_format: "TemplateFormat",
        content: str,
        encoding: str = "utf-8",
    ) -> Path:
        """Write a rendered snippet.

        Args:
            context: Context of the operation being documented.
            operation_name: Resolved operation identifier.
            snippet_name: Name of the snippet, e.g. ``http-request``.
            template_format: Format the snippet was rendered in.
            content: Rendered snippet text.
            encoding: Text encoding of the written file.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the snippet cannot be written.
        """


class ContextProviderPort(ABC):
    """Port supplying the test context of each documented operation."""

    @abstractmethod
    def before_operation(self) -> RestDocumentationContext:
        """Advance the step count and return the current context.

        Raises:
            RuntimeError: If no test is in progress.
        """


# ============================================================================
# EXTENSION PORTS (Pluggable behaviour inside the core)
# ============================================================================


class TemplateFormat(ABC):
    """Markup language snippets are rendered in."""

    id: str
    file_extension: str

    @abstractmethod
    def code_block(
        self, language: str | None, content: str, *, nowrap: bool = False
    ) -> str:
        """Render a block of source or console text."""

    @abstractmethod
    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        title: str | None = None,
    ) -> str:
        """Render a table with a header row."""

    @abstractmethod
    def literal(self, text: str) -> str:
        """Render inline monospaced text."""


class Snippet(ABC):
    """A single documentation fragment produced for an operation."""

    name: str

    @abstractmethod
    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        """Render this snippet for the operation.

        Raises:
            SnippetError: If the operation does not match the snippet's
                descriptors.
        """


class OperationPreprocessor:
    """Rewrites a request or response before it is documented.

    Both methods default to returning their input unchanged, so
    subclasses override only what they modify. Implementations must
    return new objects rather than mutate their arguments.
    """

    def preprocess_request(self, request: OperationRequest) -> OperationRequest:
        return request

    def preprocess_response(self, response: OperationResponse) -> OperationResponse:
        return response
