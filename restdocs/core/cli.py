"""Snippets showing the request as a shell command (curl and HTTPie)."""

import base64
import binascii

from .http import form_parameters
from .models import HttpHeaders, Operation, OperationRequest
from .ports import Snippet, TemplateFormat

_LINE_CONTINUATION = " \\\n    "

# Headers the command-line tools derive on their own
_IMPLICIT_HEADERS = ("Host", "Content-Length")


def _basic_credentials(request: OperationRequest) -> str | None:
    """Decode the credentials of a Basic Authorization header, if any."""
    value = request.headers.get("Authorization")
    if not value or not value.lower().startswith("basic "):
        return None
    try:
        return base64.b64decode(value[6:].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None


def _explicit_headers(request: OperationRequest, credentials: str | None) -> HttpHeaders:
    headers = request.headers.remove(*_IMPLICIT_HEADERS)
    if credentials is not None:
        headers = headers.remove("Authorization")
    if request.cookies:
        headers = headers.remove("Cookie")
    if request.parts:
        headers = headers.remove("Content-Type")
    return headers


class CurlRequestSnippet(Snippet):
    """The curl command equivalent to the documented request."""

    name = "curl-request"

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        return template_format.code_block("bash", self.command(operation.request))

    @staticmethod
    def command(request: OperationRequest) -> str:
        line = f"$ curl '{request.uri}' -i"
        if request.method != "GET":
            line += f" -X {request.method}"

        options: list[str] = []
        credentials = _basic_credentials(request)
        if credentials is not None:
            options.append(f"-u '{credentials}'")
        options.extend(
            f"-H '{name}: {value}'"
            for name, value in _explicit_headers(request, credentials)
        )
        options.extend(
            f"--cookie '{cookie.name}={cookie.value}'" for cookie in request.cookies
        )
        for part in request.parts:
            if part.submitted_file_name:
                option = f"-F '{part.name}=@{part.submitted_file_name}"
                content_type = part.headers.get("Content-Type")
                if content_type:
                    option += f";type={content_type}"
                options.append(option + "'")
            else:
                options.append(f"-F '{part.name}={part.content_as_string}'")

        if not request.parts:
            if request.content:
                options.append(f"-d '{request.content_as_string}'")
            else:
                form = form_parameters(request)
                if form:
                    options.append(f"-d '{form.to_query_string()}'")

        return line + "".join(f"{_LINE_CONTINUATION}{option}" for option in options)


class HttpieRequestSnippet(Snippet):
    """The HTTPie command equivalent to the documented request."""

    name = "httpie-request"

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        return template_format.code_block("bash", self.command(operation.request))

    @staticmethod
    def command(request: OperationRequest) -> str:
        form = form_parameters(request)
        is_form = bool(request.parts or form)

        line = "$ "
        if request.content and not request.parts:
            line += f"echo '{request.content_as_string}' | "
        line += "http"
        if is_form:
            line += " --form"
        credentials = _basic_credentials(request)
        if credentials is not None:
            line += f" --auth '{credentials}'"
        line += f" {request.method} '{request.uri}'"

        options: list[str] = []
        headers = _explicit_headers(request, credentials)
        if is_form:
            headers = headers.remove("Content-Type")
        options.extend(f"'{name}:{value}'" for name, value in headers)
        options.extend(
            f"'Cookie:{cookie.name}={cookie.value}'" for cookie in request.cookies
        )
        options.extend(f"'{name}={value}'" for name, value in form)
        for part in request.parts:
            if part.submitted_file_name:
                options.append(f"'{part.name}'@'{part.submitted_file_name}'")
            else:
                options.append(f"'{part.name}={part.content_as_string}'")

        return line + "".join(f"{_LINE_CONTINUATION}{option}" for option in options)


def curl_request() -> Snippet:
    return CurlRequestSnippet()


def httpie_request() -> Snippet:
    return HttpieRequestSnippet()
