"""Snippets documenting request parameters, path parameters and parts.

Each snippet cross-checks its descriptors against the names observed in
the request. A name that was observed but not described is an error
unless the snippet is relaxed. A non-optional descriptor whose name was
not observed is always an error.
"""

import re
from abc import abstractmethod
from collections.abc import Sequence
from urllib.parse import urlsplit

from .descriptors import ParameterDescriptor, RequestPartDescriptor
from .errors import SnippetError
from .models import Operation, OperationRequest
from .ports import Snippet, TemplateFormat

_PATH_VARIABLE = re.compile(r"\{([^{}]+)\}")

Descriptor = ParameterDescriptor | RequestPartDescriptor


def format_names(names: Sequence[str]) -> str:
    return "[" + ", ".join(names) + "]"


class _NamedDescriptorsSnippet(Snippet):
    """Validates and tabulates descriptors identified by name."""

    noun: str
    column: str

    def __init__(self, descriptors: Sequence[Descriptor], relaxed: bool = False):
        names = [descriptor.name for descriptor in descriptors]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"{self.noun} described more than once: {format_names(duplicates)}")
        for descriptor in descriptors:
            if descriptor.description is None and not descriptor.ignored:
                raise ValueError(
                    f"The descriptor for '{descriptor.name}' must either have a "
                    "description or be marked as ignored"
                )
        self.descriptors = tuple(descriptors)
        self.relaxed = relaxed

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        actual = self.actual_names(operation.request)
        self.verify(actual)
        rows = [
            (template_format.literal(descriptor.name), descriptor.description or "")
            for descriptor in self.descriptors
            if not descriptor.ignored
        ]
        return template_format.table(
            (self.column, "Description"), rows, title=self.title(operation)
        )

    def verify(self, actual: Sequence[str]) -> None:
        documented = {descriptor.name for descriptor in self.descriptors}
        undocumented = [name for name in actual if name not in documented]
        missing = [
            descriptor.name
            for descriptor in self.descriptors
            if not descriptor.optional and descriptor.name not in actual
        ]

        messages = []
        if undocumented and not self.relaxed:
            messages.append(
                f"{self.noun} with the following names were not documented: "
                f"{format_names(undocumented)}"
            )
        if missing:
            messages.append(
                f"{self.noun} with the following names were not found in the request: "
                f"{format_names(missing)}"
            )
        if messages:
            raise SnippetError(". ".join(messages))

    @abstractmethod
    def actual_names(self, request: OperationRequest) -> list[str]:
        """Names observed in the request, in order."""

    def title(self, operation: Operation) -> str | None:
        return None


class RequestParametersSnippet(_NamedDescriptorsSnippet):
    """Documents query string and form parameters."""

    name = "request-parameters"
    noun = "Request parameters"
    column = "Parameter"

    def actual_names(self, request: OperationRequest) -> list[str]:
        return request.parameters.names()


class PathParametersSnippet(_NamedDescriptorsSnippet):
    """Documents the variables of the request's URL template."""

    name = "path-parameters"
    noun = "Path parameters"
    column = "Parameter"

    def actual_names(self, request: OperationRequest) -> list[str]:
        template = self._template_path(request)
        return [
            match.split(":", 1)[0].strip()
            for match in _PATH_VARIABLE.findall(template)
        ]

    def title(self, operation: Operation) -> str | None:
        return self._template_path(operation.request)

    @staticmethod
    def _template_path(request: OperationRequest) -> str:
        if request.url_template is None:
            raise SnippetError(
                "URL template not found. Did you build the request with "
                "path_template() so that its path variables are known?"
            )
        path = urlsplit(request.url_template).path
        return path if path.startswith("/") else f"/{path}"


class RequestPartsSnippet(_NamedDescriptorsSnippet):
    """Documents the parts of a multipart request."""

    name = "request-parts"
    noun = "Request parts"
    column = "Part"

    def actual_names(self, request: OperationRequest) -> list[str]:
        return list(dict.fromkeys(part.name for part in request.parts))


def request_parameters(*descriptors: ParameterDescriptor, relaxed: bool = False) -> Snippet:
    return RequestParametersSnippet(descriptors, relaxed=relaxed)


def path_parameters(*descriptors: ParameterDescriptor, relaxed: bool = False) -> Snippet:
    return PathParametersSnippet(descriptors, relaxed=relaxed)


def request_parts(*descriptors: RequestPartDescriptor, relaxed: bool = False) -> Snippet:
    return RequestPartsSnippet(descriptors, relaxed=relaxed)
