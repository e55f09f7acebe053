"""Conversion of httpx requests and responses into operation models.

Implements RequestConverterPort and ResponseConverterPort for httpx.
Headers are copied from the raw header list so that the casing and order
sent on the wire are what gets documented.
"""

import logging
import re
from email import policy
from email.parser import BytesParser
from typing import Any
from urllib.parse import parse_qsl, quote

import httpx

from restdocs.core.http import FORM_CONTENT_TYPE
from restdocs.core.models import (
    HttpHeaders,
    OperationRequest,
    OperationRequestPart,
    OperationResponse,
    Parameters,
    RequestCookie,
    content_charset,
)
from restdocs.core.ports import RequestConverterPort, ResponseConverterPort

logger = logging.getLogger(__name__)

URL_TEMPLATE_KEY = "restdocs.url_template"

_TEMPLATE_VARIABLE = re.compile(r"\{([^{}:]+)(?::[^{}]*)?\}")


def path_template(template: str, /, **values: Any) -> dict[str, Any]:
    """Expand a URL template and remember it for path parameter documentation.

    The result is meant to be splatted into a client call:

        client.get(**path_template("/orders/{id}", id=42))

    Raises:
        KeyError: If the template has a variable with no value.
    """

    def expand(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        return quote(str(values[name]), safe="")

    return {
        "url": _TEMPLATE_VARIABLE.sub(expand, template),
        "extensions": {URL_TEMPLATE_KEY: template},
    }


def _decode_headers(headers: httpx.Headers) -> HttpHeaders:
    encoding = headers.encoding
    return HttpHeaders(
        (name.decode(encoding), value.decode(encoding)) for name, value in headers.raw
    )


def _media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def _parse_cookies(headers: HttpHeaders) -> tuple[RequestCookie, ...]:
    cookies = []
    for header in headers.get_all("Cookie"):
        for pair in header.split(";"):
            name, separator, value = pair.strip().partition("=")
            if separator and name:
                cookies.append(RequestCookie(name=name, value=value))
    return tuple(cookies)


def _parse_parts(content: bytes, content_type: str) -> tuple[OperationRequestPart, ...]:
    """Split a multipart/form-data body into its parts."""
    message = BytesParser(policy=policy.HTTP).parsebytes(
        b"Content-Type: " + content_type.encode("latin-1") + b"\r\n\r\n" + content
    )
    parts = []
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if not name:
            logger.warning("Skipping multipart part without a name")
            continue
        parts.append(
            OperationRequestPart(
                name=str(name),
                content=part.get_payload(decode=True) or b"",
                headers=HttpHeaders((key, str(value)) for key, value in part.items()),
                submitted_file_name=part.get_filename(),
            )
        )
    return tuple(parts)


class HttpxRequestConverter(RequestConverterPort[httpx.Request]):
    """Converts an ``httpx.Request`` into an ``OperationRequest``."""

    def convert(self, request: httpx.Request) -> OperationRequest:
        """Convert a request, materialising its body if necessary.

        Raises:
            httpx.StreamError: If the body cannot be read. Not wrapped.
        """
        content = request.read()
        headers = _decode_headers(request.headers)
        content_type = headers.get("Content-Type")
        media_type = _media_type(content_type)

        parameters = Parameters(
            parse_qsl(request.url.query.decode("ascii"), keep_blank_values=True)
        )
        parts: tuple[OperationRequestPart, ...] = ()
        if media_type == FORM_CONTENT_TYPE and content:
            body = content.decode(content_charset(content_type))
            parameters = Parameters(
                (*parameters, *parse_qsl(body, keep_blank_values=True))
            )
        elif media_type == "multipart/form-data" and content and content_type:
            parts = _parse_parts(content, content_type)

        return OperationRequest(
            method=request.method,
            uri=str(request.url),
            headers=headers,
            content=content,
            parameters=parameters,
            parts=parts,
            cookies=_parse_cookies(headers),
            url_template=request.extensions.get(URL_TEMPLATE_KEY),
        )


class HttpxResponseConverter(ResponseConverterPort[httpx.Response]):
    """Converts an ``httpx.Response`` into an ``OperationResponse``."""

    def convert(self, response: httpx.Response) -> OperationResponse:
        return OperationResponse(
            status=response.status_code,
            headers=_decode_headers(response.headers),
            content=response.read(),
        )
