"""Rewriting of the URIs that appear in documented operations.

Tests usually run against ``http://localhost`` or an in-process transport,
while the documentation should show the public address of the API. The
preprocessor here replaces the scheme, host and port of the request URI
and of every absolute http(s) URI in headers and bodies.
"""

import re
from urllib.parse import urlsplit, urlunsplit

from .models import HttpHeaders, OperationRequest, OperationResponse, content_charset
from .ports import OperationPreprocessor

_DEFAULT_PORTS = {"http": 80, "https": 443}

_ORIGIN = re.compile(r"(?P<scheme>https?)://(?P<host>[^/\s:\"'<>?#]+)(?::(?P<port>\d+))?")


class UriModifyingPreprocessor(OperationPreprocessor):
    """Replaces the scheme, host and port of URIs.

    Args:
        scheme: Replacement scheme, or None to keep the original.
        host: Replacement host, or None to keep the original.
        port: Replacement port, or None to keep the original. A given
            port is always shown, even when it is the scheme default.
        remove_port: Drop the port entirely.

    Raises:
        ValueError: If both ``port`` and ``remove_port`` are given.
    """

    def __init__(
        self,
        scheme: str | None = None,
        host: str | None = None,
        port: int | None = None,
        remove_port: bool = False,
    ):
        if port is not None and remove_port:
            raise ValueError("Cannot both set and remove the port of documented URIs")
        self.scheme = scheme
        self.host = host
        self.port = port
        self.remove_port = remove_port

    def modify_uri(self, uri: str) -> str:
        parsed = urlsplit(uri)
        if not parsed.scheme or not parsed.hostname:
            return uri
        netloc = self._netloc(parsed.scheme, parsed.hostname, parsed.port)
        userinfo, _, _ = parsed.netloc.rpartition("@")
        if userinfo:
            netloc = f"{userinfo}@{netloc}"
        return urlunsplit(
            (self.scheme or parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment)
        )

    def _netloc(self, scheme: str, host: str, port: int | None) -> str:
        new_host = self.host or host
        if self.remove_port:
            return new_host
        if self.port is not None:
            return f"{new_host}:{self.port}"
        new_scheme = self.scheme or scheme
        if port is None or _DEFAULT_PORTS.get(new_scheme) == port:
            return new_host
        return f"{new_host}:{port}"

    def modify_text(self, text: str) -> str:
        """Rewrite the origin of every absolute http(s) URI in ``text``."""

        def rewrite(match: re.Match[str]) -> str:
            port = int(match.group("port")) if match.group("port") else None
            scheme = self.scheme or match.group("scheme")
            return f"{scheme}://{self._netloc(match.group('scheme'), match.group('host'), port)}"

        return _ORIGIN.sub(rewrite, text)

    def _modify_content(self, content: bytes, content_type: str | None) -> bytes:
        if not content:
            return content
        charset = content_charset(content_type)
        try:
            text = content.decode(charset)
        except UnicodeDecodeError:
            return content
        return self.modify_text(text).encode(charset)

    def _modify_headers(self, headers: HttpHeaders) -> HttpHeaders:
        return HttpHeaders((name, self.modify_text(value)) for name, value in headers)

    def preprocess_request(self, request: OperationRequest) -> OperationRequest:
        uri = self.modify_uri(request.uri)
        headers = self._modify_headers(request.headers)
        if "Host" in headers:
            headers = headers.set("Host", urlsplit(uri).netloc.rpartition("@")[2])
        content = self._modify_content(request.content, request.headers.get("Content-Type"))
        if "Content-Length" in headers and content != request.content:
            headers = headers.set("Content-Length", str(len(content)))
        return request.with_changes(uri=uri, headers=headers, content=content)

    def preprocess_response(self, response: OperationResponse) -> OperationResponse:
        headers = self._modify_headers(response.headers)
        content = self._modify_content(response.content, response.headers.get("Content-Type"))
        if "Content-Length" in headers and content != response.content:
            headers = headers.set("Content-Length", str(len(content)))
        return response.with_changes(headers=headers, content=content)
