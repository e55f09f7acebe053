"""Tests for operation preprocessors and URI rewriting."""

import pytest

from restdocs.core.configuration import UriConfiguration
from restdocs.core.models import (
    HttpHeaders,
    OperationRequest,
    OperationRequestPart,
    OperationResponse,
    Parameters,
)
from restdocs.core.ports import OperationPreprocessor
from restdocs.core.preprocess import (
    _ContentModifyingPreprocessor,
    binary_parts,
    modify_parameters,
    preprocess_request,
    preprocess_response,
    pretty_print,
    remove_headers,
    remove_matching_headers,
    replace_pattern,
)
from restdocs.core.uris import UriModifyingPreprocessor


def json_request(content: bytes = b'{"a":"alpha"}') -> OperationRequest:
    return OperationRequest(
        method="POST",
        uri="http://localhost:8080/test/post-random-json",
        headers=HttpHeaders(
            [
                ("Host", "localhost:8080"),
                ("a", "alpha"),
                ("b", "bravo"),
                ("Content-Type", "application/json"),
                ("Content-Length", str(len(content))),
                ("User-Agent", "testclient"),
            ]
        ),
        content=content,
    )


class TestPrettyPrint:
    """Test pretty printing of JSON and XML bodies."""

    def test_json_request(self) -> None:
        request = pretty_print().preprocess_request(json_request())

        assert request.content == b'{\n  "a" : "alpha"\n}'
        assert request.headers.get("Content-Length") == str(len(request.content))

    def test_json_response(self) -> None:
        response = OperationResponse(status=200, content=b'{"ids":[1,2]}')

        processed = pretty_print().preprocess_response(response)

        assert processed.content == b'{\n  "ids" : [\n    1,\n    2\n  ]\n}'
        assert "Content-Length" not in processed.headers

    def test_xml(self) -> None:
        response = OperationResponse(status=200, content=b"<a><b>1</b></a>")

        processed = pretty_print().preprocess_response(response)

        assert processed.content.endswith(b"<a>\n  <b>1</b>\n</a>")

    def test_other_content_is_unchanged(self) -> None:
        response = OperationResponse(status=200, content=b"just text")

        assert pretty_print().preprocess_response(response) is response

    def test_input_is_not_mutated(self) -> None:
        original = json_request()

        pretty_print().preprocess_request(original)

        assert original.content == b'{"a":"alpha"}'


class TestHeaderPreprocessors:
    """Test removal of headers."""

    def test_remove_headers_ignores_case(self) -> None:
        request = remove_headers("A", "user-agent").preprocess_request(json_request())

        assert request.headers.names() == ["Host", "b", "Content-Type", "Content-Length"]

    def test_remove_matching_headers(self) -> None:
        response = OperationResponse(
            status=200,
            headers=HttpHeaders(
                [("X-RateLimit-Limit", "10"), ("X-RateLimit-Remaining", "9"), ("ETag", "1")]
            ),
        )

        processed = remove_matching_headers("X-RateLimit-.*").preprocess_response(response)

        assert processed.headers.items() == (("ETag", "1"),)


class TestContentPreprocessors:
    """Test rewriting of bodies."""

    def test_replace_pattern(self) -> None:
        chain = preprocess_request(
            pretty_print(),
            remove_headers("a", "Host", "Content-Length", "User-Agent"),
            replace_pattern(r'("alpha")', '"<<beta>>"'),
        )

        request = chain.preprocess_request(json_request())

        assert request.content == b'{\n  "a" : "<<beta>>"\n}'
        assert request.headers.items() == (("b", "bravo"), ("Content-Type", "application/json"))

    def test_replace_pattern_with_unknown_charset(self) -> None:
        response = OperationResponse(
            status=200,
            headers=HttpHeaders([("Content-Type", "text/plain; charset=bogus")]),
            content=b"token=secret",
        )

        processed = replace_pattern("secret", "<<token>>").preprocess_response(response)

        assert processed.content == b"token=<<token>>"

    def test_content_preprocessor_requires_modify_content(self) -> None:
        class Incomplete(_ContentModifyingPreprocessor):
            pass

        with pytest.raises(TypeError, match="modify_content"):
            Incomplete()

    def test_response_chain_leaves_request_alone(self) -> None:
        original = json_request()

        chain = preprocess_response(pretty_print())

        assert chain.preprocess_request(original) is original

    def test_base_preprocessor_is_identity(self) -> None:
        original = json_request()

        assert OperationPreprocessor().preprocess_request(original) is original


class TestModifyParameters:
    """Test modification of request parameters."""

    def test_add_set_remove(self) -> None:
        request = OperationRequest(
            method="GET",
            uri="http://localhost/items?page=1&token=secret",
            parameters=Parameters([("page", "1"), ("token", "secret")]),
        )

        processed = modify_parameters(
            add={"sort": "name"}, set={"page": "2"}, remove=["token"]
        ).preprocess_request(request)

        assert processed.parameters.items() == (("sort", "name"), ("page", "2"))
        assert processed.uri == request.uri


class TestBinaryParts:
    """Test replacement of binary part content."""

    def test_named_and_keyword_parts(self) -> None:
        request = OperationRequest(
            method="POST",
            uri="http://localhost/upload",
            parts=(
                OperationRequestPart(name="field1", content=b"field1Data"),
                OperationRequestPart(name="file", content=b"\x89PNG", submitted_file_name="a.png"),
                OperationRequestPart(name="cv", content=b"%PDF"),
            ),
        )

        processed = binary_parts("file", cv="<<pdf>>").preprocess_request(request)

        assert [part.content for part in processed.parts] == [
            b"field1Data",
            b"<< binary data >>",
            b"<<pdf>>",
        ]
        assert processed.parts[1].submitted_file_name == "a.png"


class TestUriModification:
    """Test rewriting of documented URIs."""

    def test_scheme_host_and_port_removed(self) -> None:
        request = OperationRequest(
            method="POST",
            uri="http://localhost:8080/orders?x=1",
            headers=HttpHeaders([("Host", "localhost:8080")]),
            content=b'{"self":"http://localhost:8080/orders/1"}',
        )
        preprocessor = UriModifyingPreprocessor(
            scheme="https", host="api.example.com", remove_port=True
        )

        processed = preprocessor.preprocess_request(request)

        assert processed.uri == "https://api.example.com/orders?x=1"
        assert processed.headers.get("Host") == "api.example.com"
        assert processed.content == b'{"self":"https://api.example.com/orders/1"}'

    def test_explicit_port_kept_when_not_default(self) -> None:
        request = OperationRequest(method="POST", uri="http://localhost:8080/test/post-simple")
        preprocessor = UriModifyingPreprocessor(scheme="https", host="testing.com", port=80)

        assert preprocessor.preprocess_request(request).uri == "https://testing.com:80/test/post-simple"

    def test_explicit_default_port_is_kept(self) -> None:
        request = OperationRequest(method="GET", uri="http://localhost:8080/orders")
        preprocessor = UriModifyingPreprocessor(scheme="https", port=443)

        assert preprocessor.preprocess_request(request).uri == "https://localhost:443/orders"

    def test_original_default_port_is_omitted(self) -> None:
        request = OperationRequest(method="GET", uri="http://localhost:443/orders")
        preprocessor = UriModifyingPreprocessor(scheme="https")

        assert preprocessor.preprocess_request(request).uri == "https://localhost/orders"

    def test_response_headers_and_content(self) -> None:
        response = OperationResponse(
            status=201,
            headers=HttpHeaders([("Location", "http://localhost:8080/orders/1")]),
            content=b"see http://localhost:8080/orders/1",
        )
        preprocessor = UriModifyingPreprocessor(host="api.example.com", remove_port=True)

        processed = preprocessor.preprocess_response(response)

        assert processed.headers.get("Location") == "http://api.example.com/orders/1"
        assert processed.content == b"see http://api.example.com/orders/1"

    def test_port_and_remove_port_conflict(self) -> None:
        with pytest.raises(ValueError, match="Cannot both set and remove the port"):
            UriModifyingPreprocessor(port=80, remove_port=True)

    def test_uri_configuration(self) -> None:
        assert UriConfiguration().is_identity
        assert type(UriConfiguration().as_preprocessor()) is OperationPreprocessor
        assert isinstance(
            UriConfiguration(host="api.example.com").as_preprocessor(),
            UriModifyingPreprocessor,
        )

    def test_uri_configuration_validates_port(self) -> None:
        with pytest.raises(ValueError, match="port must be between 1 and 65535"):
            UriConfiguration(port=70000)
