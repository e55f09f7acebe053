"""Tests for the HTTP listing, body and command-line snippets."""

from restdocs.core.cli import curl_request, httpie_request
from restdocs.core.http import (
    MULTIPART_BOUNDARY,
    http_request,
    http_response,
    request_body,
    response_body,
)
from restdocs.core.models import (
    HttpHeaders,
    Operation,
    OperationRequest,
    OperationRequestPart,
    OperationResponse,
    Parameters,
    RequestCookie,
    content_charset,
)
from restdocs.core.templates import asciidoctor, markdown

BASE = "http://localhost:8080"


def make_operation(request: OperationRequest, response: OperationResponse | None = None) -> Operation:
    return Operation(
        name="snippets", request=request, response=response or OperationResponse(status=200)
    )


def get_with_query() -> OperationRequest:
    return OperationRequest(
        method="GET",
        uri=f"{BASE}/test/get-default?a=alpha&b=bravo",
        headers=HttpHeaders([("Host", "localhost:8080"), ("Accept", "*/*")]),
        parameters=Parameters([("a", "alpha"), ("b", "bravo")]),
    )


def form_post(uri: str = f"{BASE}/test/post-form", parameters=None) -> OperationRequest:
    return OperationRequest(
        method="POST",
        uri=uri,
        parameters=parameters or Parameters([("a", "alpha"), ("b", "bravo")]),
    )


def multipart_post() -> OperationRequest:
    return OperationRequest(
        method="POST",
        uri=f"{BASE}/test/post-multipart",
        headers=HttpHeaders([("Content-Type", "multipart/form-data; boundary=abc")]),
        content=b"--abc--",
        parts=(
            OperationRequestPart(name="field1", content=b"field1Data"),
            OperationRequestPart(
                name="file",
                content=b"<<image-data>>",
                headers=HttpHeaders([("Content-Type", "image/png")]),
                submitted_file_name="image.png",
            ),
        ),
    )


class TestHttpRequestSnippet:
    """Test the raw HTTP request listing."""

    def test_get_request(self) -> None:
        rendered = http_request().render(make_operation(get_with_query()), asciidoctor())

        assert rendered == (
            '[source,http,options="nowrap"]\n'
            "----\n"
            "GET /test/get-default?a=alpha&b=bravo HTTP/1.1\n"
            "Host: localhost:8080\n"
            "Accept: */*\n"
            "----"
        )

    def test_host_header_added_when_missing(self) -> None:
        request = OperationRequest(method="GET", uri="https://api.example.com/orders")

        rendered = http_request().render(make_operation(request), markdown())

        assert rendered == "```http\nGET /orders HTTP/1.1\nHost: api.example.com\n```"

    def test_request_with_content(self) -> None:
        request = OperationRequest(
            method="POST",
            uri=f"{BASE}/test/post-simple",
            headers=HttpHeaders(
                [("Host", "localhost:8080"), ("Content-Type", "text/plain; charset=UTF-8")]
            ),
            content=b"content",
        )

        rendered = http_request().render(make_operation(request), asciidoctor())

        assert rendered.endswith(
            "Content-Type: text/plain; charset=UTF-8\n\ncontent\n----"
        )

    def test_form_parameters_become_body(self) -> None:
        rendered = http_request().render(make_operation(form_post()), asciidoctor())

        assert rendered == (
            '[source,http,options="nowrap"]\n'
            "----\n"
            "POST /test/post-form HTTP/1.1\n"
            "Host: localhost:8080\n"
            "Content-Type: application/x-www-form-urlencoded\n"
            "\n"
            "a=alpha&b=bravo\n"
            "----"
        )

    def test_query_parameters_stay_out_of_form_body(self) -> None:
        request = form_post(
            uri=f"{BASE}/test/post-form?c=charlie",
            parameters=Parameters([("c", "charlie"), ("a", "alpha")]),
        )

        rendered = http_request().render(make_operation(request), asciidoctor())

        assert "POST /test/post-form?c=charlie HTTP/1.1" in rendered
        assert rendered.endswith("\n\na=alpha\n----")

    def test_multipart_body(self) -> None:
        rendered = http_request().render(make_operation(multipart_post()), asciidoctor())

        assert (
            f"Content-Type: multipart/form-data; boundary={MULTIPART_BOUNDARY}\n" in rendered
        )
        assert rendered.endswith(
            f"--{MULTIPART_BOUNDARY}\n"
            'Content-Disposition: form-data; name="field1"\n'
            "\n"
            "field1Data\n"
            f"--{MULTIPART_BOUNDARY}\n"
            'Content-Disposition: form-data; name="file"; filename="image.png"\n'
            "Content-Type: image/png\n"
            "\n"
            "<<image-data>>\n"
            f"--{MULTIPART_BOUNDARY}--\n"
            "----"
        )


class TestHttpResponseSnippet:
    """Test the raw HTTP response listing."""

    def test_response_with_body(self) -> None:
        response = OperationResponse(
            status=201,
            headers=HttpHeaders([("Content-Type", "application/json")]),
            content=b'{"id":1}',
        )

        rendered = http_response().render(make_operation(get_with_query(), response), asciidoctor())

        assert rendered == (
            '[source,http,options="nowrap"]\n'
            "----\n"
            "HTTP/1.1 201 Created\n"
            "Content-Type: application/json\n"
            "\n"
            '{"id":1}\n'
            "----"
        )

    def test_response_without_body(self) -> None:
        response = OperationResponse(status=204)

        rendered = http_response().render(make_operation(get_with_query(), response), markdown())

        assert rendered == "```http\nHTTP/1.1 204 No Content\n```"

    def test_unknown_charset_falls_back_to_utf8(self) -> None:
        response = OperationResponse(
            status=200,
            headers=HttpHeaders([("Content-Type", "text/plain; charset=bogus")]),
            content="café".encode(),
        )

        rendered = http_response().render(make_operation(get_with_query(), response), asciidoctor())

        assert rendered.endswith("\ncafé\n----")

    def test_content_charset(self) -> None:
        assert content_charset('text/plain; charset="ISO-8859-1"') == "ISO-8859-1"
        assert content_charset("text/plain; charset=bogus") == "utf-8"
        assert content_charset(None, default="latin-1") == "latin-1"


class TestBodySnippets:
    """Test the standalone request and response body snippets."""

    def test_request_body(self) -> None:
        request = OperationRequest(method="POST", uri=f"{BASE}/x", content=b'{"a":1}')

        rendered = request_body().render(make_operation(request), asciidoctor())

        assert request_body().name == "request-body"
        assert rendered == '[source,options="nowrap"]\n----\n{"a":1}\n----'

    def test_response_body(self) -> None:
        response = OperationResponse(status=200, content=b"default")

        rendered = response_body().render(make_operation(get_with_query(), response), markdown())

        assert response_body().name == "response-body"
        assert rendered == "```\ndefault\n```"


class TestCurlRequestSnippet:
    """Test the curl command snippet."""

    def test_get_with_query_string(self) -> None:
        rendered = curl_request().render(make_operation(get_with_query()), asciidoctor())

        assert rendered == (
            "[source,bash]\n"
            "----\n"
            "$ curl 'http://localhost:8080/test/get-default?a=alpha&b=bravo' -i \\\n"
            "    -H 'Accept: */*'\n"
            "----"
        )

    def test_post_with_content(self) -> None:
        request = OperationRequest(
            method="POST",
            uri=f"{BASE}/test/post-simple",
            headers=HttpHeaders(
                [
                    ("Host", "localhost:8080"),
                    ("Accept", "text/plain"),
                    ("Content-Type", "text/plain; charset=UTF-8"),
                    ("Content-Length", "7"),
                ]
            ),
            content=b"content",
        )

        assert curl_request().render(make_operation(request), asciidoctor()) == (
            "[source,bash]\n"
            "----\n"
            "$ curl 'http://localhost:8080/test/post-simple' -i -X POST \\\n"
            "    -H 'Accept: text/plain' \\\n"
            "    -H 'Content-Type: text/plain; charset=UTF-8' \\\n"
            "    -d 'content'\n"
            "----"
        )

    def test_form_parameters_without_content(self) -> None:
        assert curl_request().render(make_operation(form_post()), markdown()) == (
            "```bash\n"
            "$ curl 'http://localhost:8080/test/post-form' -i -X POST \\\n"
            "    -d 'a=alpha&b=bravo'\n"
            "```"
        )

    def test_basic_auth_and_cookies(self) -> None:
        request = OperationRequest(
            method="GET",
            uri=f"{BASE}/orders",
            headers=HttpHeaders(
                [
                    ("Authorization", "Basic dXNlcjpzZWNyZXQ="),
                    ("Cookie", "session=abc"),
                ]
            ),
            cookies=(RequestCookie(name="session", value="abc"),),
        )

        assert curl_request().render(make_operation(request), markdown()) == (
            "```bash\n"
            "$ curl 'http://localhost:8080/orders' -i \\\n"
            "    -u 'user:secret' \\\n"
            "    --cookie 'session=abc'\n"
            "```"
        )

    def test_multipart_parts(self) -> None:
        rendered = curl_request().render(make_operation(multipart_post()), markdown())

        assert rendered == (
            "```bash\n"
            "$ curl 'http://localhost:8080/test/post-multipart' -i -X POST \\\n"
            "    -F 'field1=field1Data' \\\n"
            "    -F 'file=@image.png;type=image/png'\n"
            "```"
        )


class TestHttpieRequestSnippet:
    """Test the HTTPie command snippet."""

    def test_json_content_is_piped(self) -> None:
        request = OperationRequest(
            method="POST",
            uri=f"{BASE}/test/post-random-json",
            headers=HttpHeaders([("Content-Type", "application/json")]),
            content=b'{"a":"alpha"}',
        )

        rendered = httpie_request().render(make_operation(request), markdown())

        assert httpie_request().name == "httpie-request"
        assert rendered == (
            "```bash\n"
            "$ echo '{\"a\":\"alpha\"}' | http POST 'http://localhost:8080/test/post-random-json' \\\n"
            "    'Content-Type:application/json'\n"
            "```"
        )

    def test_form_parameters(self) -> None:
        rendered = httpie_request().render(make_operation(form_post()), markdown())

        assert rendered == (
            "```bash\n"
            "$ http --form POST 'http://localhost:8080/test/post-form' \\\n"
            "    'a=alpha' \\\n"
            "    'b=bravo'\n"
            "```"
        )
