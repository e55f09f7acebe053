"""Preprocessors that rewrite a request or response before it is documented.

Typical uses are pretty-printing payloads, hiding noisy headers and
masking values that change between runs:

    document(
        "create-order",
        request_preprocessor=preprocess_request(remove_headers("User-Agent")),
        response_preprocessor=preprocess_response(pretty_print()),
    )
"""

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from xml.dom import minidom
from xml.parsers.expat import ExpatError

from .models import (
    HttpHeaders,
    OperationRequest,
    OperationResponse,
    Parameters,
    content_charset,
)
from .ports import OperationPreprocessor


class OperationRequestPreprocessor(OperationPreprocessor):
    """Applies a chain of preprocessors to the request, in order."""

    def __init__(self, preprocessors: Iterable[OperationPreprocessor]):
        self.preprocessors = tuple(preprocessors)

    def preprocess_request(self, request: OperationRequest) -> OperationRequest:
        for preprocessor in self.preprocessors:
            request = preprocessor.preprocess_request(request)
        return request


class OperationResponsePreprocessor(OperationPreprocessor):
    """Applies a chain of preprocessors to the response, in order."""

    def __init__(self, preprocessors: Iterable[OperationPreprocessor]):
        self.preprocessors = tuple(preprocessors)

    def preprocess_response(self, response: OperationResponse) -> OperationResponse:
        for preprocessor in self.preprocessors:
            response = preprocessor.preprocess_response(response)
        return response


def preprocess_request(*preprocessors: OperationPreprocessor) -> OperationRequestPreprocessor:
    return OperationRequestPreprocessor(preprocessors)


def preprocess_response(*preprocessors: OperationPreprocessor) -> OperationResponsePreprocessor:
    return OperationResponsePreprocessor(preprocessors)


def _with_content_length(headers: HttpHeaders, content: bytes) -> HttpHeaders:
    if "Content-Length" in headers:
        return headers.set("Content-Length", str(len(content)))
    return headers


class _ContentModifyingPreprocessor(OperationPreprocessor, ABC):
    """Base for preprocessors that rewrite the body of a request or response."""

    @abstractmethod
    def modify_content(self, content: bytes, content_type: str | None) -> bytes:
        """Return the rewritten body, or ``content`` itself when unchanged."""

    def preprocess_request(self, request: OperationRequest) -> OperationRequest:
        content = self.modify_content(request.content, request.headers.get("Content-Type"))
        if content == request.content:
            return request
        return request.with_changes(
            content=content, headers=_with_content_length(request.headers, content)
        )

    def preprocess_response(self, response: OperationResponse) -> OperationResponse:
        content = self.modify_content(response.content, response.headers.get("Content-Type"))
        if content == response.content:
            return response
        return response.with_changes(
            content=content, headers=_with_content_length(response.headers, content)
        )


class PrettyPrintingPreprocessor(_ContentModifyingPreprocessor):
    """Indents JSON and XML bodies. Other content is left as is."""

    def modify_content(self, content: bytes, content_type: str | None) -> bytes:
        if not content:
            return content
        for formatter in (self._json, self._xml):
            formatted = formatter(content)
            if formatted is not None:
                return formatted
        return content

    @staticmethod
    def _json(content: bytes) -> bytes | None:
        try:
            parsed = json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        return json.dumps(
            parsed, indent=2, separators=(",", " : "), ensure_ascii=False
        ).encode("utf-8")

    @staticmethod
    def _xml(content: bytes) -> bytes | None:
        try:
            document = minidom.parseString(content)
        except ExpatError:
            return None
        pretty = document.toprettyxml(indent="  ", encoding="utf-8")
        lines = [line for line in pretty.splitlines() if line.strip()]
        return b"\n".join(lines)


class PatternReplacingPreprocessor(_ContentModifyingPreprocessor):
    """Replaces every match of a regular expression in the body."""

    def __init__(self, pattern: str | re.Pattern[str], replacement: str):
        self.pattern = re.compile(pattern)
        self.replacement = replacement

    def modify_content(self, content: bytes, content_type: str | None) -> bytes:
        if not content:
            return content
        charset = content_charset(content_type)
        text = content.decode(charset, errors="replace")
        return self.pattern.sub(self.replacement, text).encode(charset)


class HeaderRemovingPreprocessor(OperationPreprocessor):
    """Removes headers whose names satisfy a predicate."""

    def __init__(self, should_remove: Callable[[str], bool]):
        self.should_remove = should_remove

    def _filter(self, headers: HttpHeaders) -> HttpHeaders:
        return HttpHeaders(
            (name, value) for name, value in headers if not self.should_remove(name)
        )

    def preprocess_request(self, request: OperationRequest) -> OperationRequest:
        return request.with_changes(headers=self._filter(request.headers))

    def preprocess_response(self, response: OperationResponse) -> OperationResponse:
        return response.with_changes(headers=self._filter(response.headers))


class ParametersModifyingPreprocessor(OperationPreprocessor):
    """Adds, sets and removes request parameters.

    The request URI is left untouched; only the documented parameters
    change.
    """

    def __init__(
        self,
        add: Mapping[str, str] | None = None,
        set: Mapping[str, str] | None = None,
        remove: Iterable[str] = (),
    ):
        self.add = dict(add or {})
        self.set = dict(set or {})
        self.remove = tuple(remove)

    def preprocess_request(self, request: OperationRequest) -> OperationRequest:
        parameters: Parameters = request.parameters
        for name, value in self.add.items():
            parameters = parameters.add(name, value)
        for name, value in self.set.items():
            parameters = parameters.set(name, value)
        if self.remove:
            parameters = parameters.remove(*self.remove)
        return request.with_changes(parameters=parameters)


class BinaryPartsPreprocessor(OperationPreprocessor):
    """Replaces the content of named multipart parts with placeholder text.

    Binary uploads render as unreadable noise otherwise.
    """

    DEFAULT_PLACEHOLDER = "<< binary data >>"

    def __init__(self, replacements: Mapping[str, str]):
        self.replacements = dict(replacements)

    def preprocess_request(self, request: OperationRequest) -> OperationRequest:
        if not request.parts:
            return request
        parts = tuple(
            replace(part, content=self.replacements[part.name].encode("utf-8"))
            if part.name in self.replacements
            else part
            for part in request.parts
        )
        return request.with_changes(parts=parts)


def pretty_print() -> OperationPreprocessor:
    return PrettyPrintingPreprocessor()


def remove_headers(*names: str) -> OperationPreprocessor:
    """Remove the named headers, matched case-insensitively."""
    lookups = {name.lower() for name in names}
    return HeaderRemovingPreprocessor(lambda name: name.lower() in lookups)


def remove_matching_headers(*patterns: str) -> OperationPreprocessor:
    """Remove headers whose names fully match any of the patterns."""
    compiled = [re.compile(pattern) for pattern in patterns]
    return HeaderRemovingPreprocessor(
        lambda name: any(pattern.fullmatch(name) for pattern in compiled)
    )


def replace_pattern(pattern: str | re.Pattern[str], replacement: str) -> OperationPreprocessor:
    return PatternReplacingPreprocessor(pattern, replacement)


def modify_parameters(
    *,
    add: Mapping[str, str] | None = None,
    set: Mapping[str, str] | None = None,
    remove: Iterable[str] = (),
) -> OperationPreprocessor:
    return ParametersModifyingPreprocessor(add=add, set=set, remove=remove)


def binary_parts(*names: str, **replacements: str) -> OperationPreprocessor:
    """Replace the content of multipart parts.

    Parts named positionally get the default placeholder, keyword
    arguments give their own text: ``binary_parts("avatar", cv="<< pdf >>")``.
    """
    mapping = dict.fromkeys(names, BinaryPartsPreprocessor.DEFAULT_PLACEHOLDER)
    mapping.update(replacements)
    return BinaryPartsPreprocessor(mapping)
