"""Document HTTP APIs from the httpx exchanges made by their tests.

Typical use in a pytest suite (the ``rest_documentation`` fixture is
provided by the bundled plugin):

    from restdocs import document, documentation_configuration, register
    from restdocs import field_with_path, response_fields

    def test_get_order(rest_documentation):
        client = register(
            TestClient(app),
            documentation_configuration(rest_documentation),
            document("get-order", response_fields(field_with_path("id", "Order id"))),
        )
        client.get("/orders/1")
"""

from restdocs.adapters.httpx import path_template, register
from restdocs.config import Settings, load_settings
from restdocs.core import (
    JsonFieldType,
    ManualRestDocumentation,
    SnippetError,
    asciidoctor,
    binary_parts,
    curl_request,
    field_with_path,
    header_with_name,
    http_request,
    http_response,
    httpie_request,
    markdown,
    modify_parameters,
    parameter_with_name,
    part_with_name,
    path_parameters,
    preprocess_request,
    preprocess_response,
    pretty_print,
    remove_headers,
    remove_matching_headers,
    replace_pattern,
    request_body,
    request_fields,
    request_headers,
    request_parameters,
    request_parts,
    response_body,
    response_fields,
    response_headers,
)
from restdocs.documentation import document, documentation_configuration

__version__ = "0.1.0"

__all__ = [
    "JsonFieldType",
    "ManualRestDocumentation",
    "Settings",
    "SnippetError",
    "asciidoctor",
    "binary_parts",
    "curl_request",
    "document",
    "documentation_configuration",
    "field_with_path",
    "header_with_name",
    "http_request",
    "http_response",
    "httpie_request",
    "load_settings",
    "markdown",
    "modify_parameters",
    "parameter_with_name",
    "part_with_name",
    "path_parameters",
    "path_template",
    "preprocess_request",
    "preprocess_response",
    "pretty_print",
    "register",
    "remove_headers",
    "remove_matching_headers",
    "replace_pattern",
    "request_body",
    "request_fields",
    "request_headers",
    "request_parameters",
    "request_parts",
    "response_body",
    "response_fields",
    "response_headers",
]
