"""Core documentation logic for httpx-restdocs.

This package contains zero external dependencies: models, descriptors,
snippets, preprocessors and template formats only know about the
client-agnostic operation models. Client integrations and file output
are handled by the adapters package.
"""

from .cli import curl_request, httpie_request
from .configuration import SnippetConfiguration, UriConfiguration
from .context import ManualRestDocumentation
from .descriptors import (
    FieldDescriptor,
    HeaderDescriptor,
    JsonFieldType,
    ParameterDescriptor,
    RequestPartDescriptor,
    field_with_path,
    header_with_name,
    parameter_with_name,
    part_with_name,
)
from .errors import (
    FieldTypeMismatchError,
    FieldTypeRequiredError,
    MissingConfigurationError,
    SnippetError,
)
from .generator import RestDocumentationGenerator, default_snippets
from .headers import request_headers, response_headers
from .http import http_request, http_response, request_body, response_body
from .models import (
    HttpHeaders,
    Operation,
    OperationRequest,
    OperationRequestPart,
    OperationResponse,
    Parameters,
    RequestCookie,
    RestDocumentationContext,
)
from .parameters import path_parameters, request_parameters, request_parts
from .payload import request_fields, response_fields
from .preprocess import (
    binary_parts,
    modify_parameters,
    preprocess_request,
    preprocess_response,
    pretty_print,
    remove_headers,
    remove_matching_headers,
    replace_pattern,
)
from .templates import asciidoctor, markdown, template_format_for

__all__ = [
    "FieldDescriptor",
    "FieldTypeMismatchError",
    "FieldTypeRequiredError",
    "HeaderDescriptor",
    "HttpHeaders",
    "JsonFieldType",
    "ManualRestDocumentation",
    "MissingConfigurationError",
    "Operation",
    "OperationRequest",
    "OperationRequestPart",
    "OperationResponse",
    "ParameterDescriptor",
    "Parameters",
    "RequestCookie",
    "RequestPartDescriptor",
    "RestDocumentationContext",
    "RestDocumentationGenerator",
    "SnippetConfiguration",
    "SnippetError",
    "UriConfiguration",
    "asciidoctor",
    "binary_parts",
    "curl_request",
    "default_snippets",
    "field_with_path",
    "header_with_name",
    "http_request",
    "http_response",
    "httpie_request",
    "markdown",
    "modify_parameters",
    "parameter_with_name",
    "part_with_name",
    "path_parameters",
    "preprocess_request",
    "preprocess_response",
    "pretty_print",
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
    "template_format_for",
]
