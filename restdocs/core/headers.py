"""Snippets documenting request and response headers.

Unlike parameters, undocumented headers are allowed: clients and servers
add many headers nobody wants to describe. Only documented, non-optional
headers that are absent cause a failure.
"""

from abc import abstractmethod
from collections.abc import Sequence

from .descriptors import HeaderDescriptor
from .errors import SnippetError
from .models import HttpHeaders, Operation
from .parameters import format_names
from .ports import Snippet, TemplateFormat


class _HeadersSnippet(Snippet):
    side: str

    def __init__(self, descriptors: Sequence[HeaderDescriptor]):
        for descriptor in descriptors:
            if descriptor.description is None:
                raise ValueError(
                    f"The descriptor for header '{descriptor.name}' must have a description"
                )
        self.descriptors = tuple(descriptors)

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        headers = self.observed(operation)
        missing = [
            descriptor.name
            for descriptor in self.descriptors
            if not descriptor.optional and descriptor.name not in headers
        ]
        if missing:
            raise SnippetError(
                "Headers with the following names were not found in the "
                f"{self.side}: {format_names(missing)}"
            )
        rows = [
            (template_format.literal(descriptor.name), descriptor.description or "")
            for descriptor in self.descriptors
        ]
        return template_format.table(("Name", "Description"), rows)

    @abstractmethod
    def observed(self, operation: Operation) -> HttpHeaders:
        """Headers of the documented side of the exchange."""


class RequestHeadersSnippet(_HeadersSnippet):
    name = "request-headers"
    side = "request"

    def observed(self, operation: Operation) -> HttpHeaders:
        return operation.request.headers


class ResponseHeadersSnippet(_HeadersSnippet):
    name = "response-headers"
    side = "response"

    def observed(self, operation: Operation) -> HttpHeaders:
        return operation.response.headers


def request_headers(*descriptors: HeaderDescriptor) -> Snippet:
    return RequestHeadersSnippet(descriptors)


def response_headers(*descriptors: HeaderDescriptor) -> Snippet:
    return ResponseHeadersSnippet(descriptors)
