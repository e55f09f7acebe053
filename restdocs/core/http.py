"""Snippets listing the raw HTTP request and response."""

from http import HTTPStatus
from urllib.parse import urlsplit

from .models import HttpHeaders, Operation, OperationRequest, Parameters
from .ports import Snippet, TemplateFormat

MULTIPART_BOUNDARY = "6o2knFse3p53ty9dmcQvWAIx1zInP11uCfbm"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_FORM_METHODS = frozenset({"POST", "PUT", "PATCH"})


def form_parameters(request: OperationRequest) -> Parameters:
    """Parameters that belong in the body of a form request without content.

    Empty when the request carries its own content or cannot have a
    form body.
    """
    if request.content or request.parts or request.method not in _FORM_METHODS:
        return Parameters()
    return request.parameters.unique_to(request.uri)


def host_header(uri: str) -> str:
    parsed = urlsplit(uri)
    return parsed.netloc.rpartition("@")[2]


class HttpRequestSnippet(Snippet):
    """Lists the request as it would appear on the wire."""

    name = "http-request"

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        request = operation.request
        lines = [f"{request.method} {self._request_target(request.uri)} HTTP/1.1"]
        lines.extend(f"{name}: {value}" for name, value in self._headers(request))
        body = self._body(request)
        if body:
            lines.append("")
            lines.append(body)
        return template_format.code_block("http", "\n".join(lines), nowrap=True)

    @staticmethod
    def _request_target(uri: str) -> str:
        parsed = urlsplit(uri)
        target = parsed.path or "/"
        if parsed.query:
            target = f"{target}?{parsed.query}"
        return target

    @staticmethod
    def _headers(request: OperationRequest) -> HttpHeaders:
        headers = request.headers
        if "Host" not in headers:
            headers = HttpHeaders((("Host", host_header(request.uri)), *headers))
        if request.parts:
            headers = headers.set(
                "Content-Type", f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"
            )
        elif form_parameters(request) and "Content-Type" not in headers:
            headers = headers.add("Content-Type", FORM_CONTENT_TYPE)
        return headers

    @staticmethod
    def _body(request: OperationRequest) -> str:
        if request.parts:
            return _multipart_body(request)
        if request.content:
            return request.content_as_string
        return form_parameters(request).to_query_string()


def _multipart_body(request: OperationRequest) -> str:
    lines = []
    for part in request.parts:
        lines.append(f"--{MULTIPART_BOUNDARY}")
        disposition = f'form-data; name="{part.name}"'
        if part.submitted_file_name:
            disposition += f'; filename="{part.submitted_file_name}"'
        lines.append(f"Content-Disposition: {disposition}")
        lines.extend(
            f"{name}: {value}"
            for name, value in part.headers.remove("Content-Disposition")
        )
        lines.append("")
        lines.append(part.content_as_string)
    lines.append(f"--{MULTIPART_BOUNDARY}--")
    return "\n".join(lines)


class HttpResponseSnippet(Snippet):
    """Lists the response as it would appear on the wire."""

    name = "http-response"

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        response = operation.response
        lines = [f"HTTP/1.1 {self._status_line(response.status)}"]
        lines.extend(f"{name}: {value}" for name, value in response.headers)
        if response.content:
            lines.append("")
            lines.append(response.content_as_string)
        return template_format.code_block("http", "\n".join(lines), nowrap=True)

    @staticmethod
    def _status_line(status: int) -> str:
        try:
            return f"{status} {HTTPStatus(status).phrase}"
        except ValueError:
            return str(status)


class RequestBodySnippet(Snippet):
    """The request body on its own."""

    name = "request-body"

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        return template_format.code_block(
            None, operation.request.content_as_string, nowrap=True
        )


class ResponseBodySnippet(Snippet):
    """The response body on its own."""

    name = "response-body"

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        return template_format.code_block(
            None, operation.response.content_as_string, nowrap=True
        )


def http_request() -> Snippet:
    return HttpRequestSnippet()


def http_response() -> Snippet:
    return HttpResponseSnippet()


def request_body() -> Snippet:
    return RequestBodySnippet()


def response_body() -> Snippet:
    return ResponseBodySnippet()
