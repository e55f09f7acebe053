"""Generation of documentation snippets for a single operation.

The generator is client agnostic: converters turn the client's request
and response into core models, preprocessors rewrite them, and each
snippet is rendered and handed to the configured writer.
"""

import logging
from typing import Generic

from .cli import curl_request
from .configuration import SnippetConfiguration
from .errors import MissingConfigurationError
from .http import http_request, http_response
from .models import Operation
from .placeholders import resolve_placeholders
from .ports import (
    OperationPreprocessor,
    RequestConverterPort,
    RequestT,
    ResponseConverterPort,
    ResponseT,
    Snippet,
)

logger = logging.getLogger(__name__)


def default_snippets() -> list[Snippet]:
    """Snippets written for every documented operation unless configured otherwise."""
    return [curl_request(), http_request(), http_response()]


class RestDocumentationGenerator(Generic[RequestT, ResponseT]):
    """Documents operations under one identifier.

    Args:
        identifier: Operation identifier, may contain placeholders such as
            ``{method-name}`` and ``{step}``.
        request_converter: Converts the client's request.
        response_converter: Converts the client's response.
        *snippets: Snippets written in addition to the defaults.
        request_preprocessor: Applied to the request before rendering.
        response_preprocessor: Applied to the response before rendering.
        include_default_snippets: Whether the configured default snippets
            are written too.
    """

    def __init__(
        self,
        identifier: str,
        request_converter: RequestConverterPort[RequestT],
        response_converter: ResponseConverterPort[ResponseT],
        *snippets: Snippet,
        request_preprocessor: OperationPreprocessor | None = None,
        response_preprocessor: OperationPreprocessor | None = None,
        include_default_snippets: bool = True,
    ):
        if not identifier or not identifier.strip():
            raise ValueError("identifier must be a non-empty string")
        self.identifier = identifier
        self.request_converter = request_converter
        self.response_converter = response_converter
        self.snippets: tuple[Snippet, ...] = snippets
        self.request_preprocessor = request_preprocessor or OperationPreprocessor()
        self.response_preprocessor = response_preprocessor or OperationPreprocessor()
        self.include_default_snippets = include_default_snippets

    def handle(
        self,
        request: RequestT,
        response: ResponseT,
        configuration: SnippetConfiguration | None,
    ) -> Operation:
        """Document one exchange and return the operation that was written.

        Raises:
            MissingConfigurationError: If no configuration is available.
            SnippetError: If a snippet does not match the operation.
            OSError: If a snippet cannot be written.
        """
        if configuration is None:
            raise MissingConfigurationError(
                "No documentation configuration found on the request. Was the "
                "configurer from documentation_configuration() registered on the client?"
            )

        uri_preprocessor = configuration.uris.as_preprocessor()
        operation_request = self.request_preprocessor.preprocess_request(
            uri_preprocessor.preprocess_request(self.request_converter.convert(request))
        )
        operation_response = self.response_preprocessor.preprocess_response(
            uri_preprocessor.preprocess_response(self.response_converter.convert(response))
        )

        context = configuration.context
        operation = Operation(
            name=resolve_placeholders(self.identifier, context),
            request=operation_request,
            response=operation_response,
            attributes={
                "context": context,
                "template_format": configuration.template_format,
            },
        )

        for snippet in self._snippets_for(configuration):
            content = snippet.render(operation, configuration.template_format)
            path = configuration.writer.write(
                context,
                operation.name,
                snippet.name,
                configuration.template_format,
                content + "\n",
                encoding=configuration.encoding,
            )
            logger.debug(f"Wrote {snippet.name} snippet to {path}")

        logger.info(
            f"Documented operation {operation.name}",
            extra={
                "test_class": context.test_class,
                "test_method": context.test_method_name,
                "step": context.step_count,
            },
        )
        return operation

    def _snippets_for(self, configuration: SnippetConfiguration) -> list[Snippet]:
        snippets: list[Snippet] = []
        if self.include_default_snippets:
            snippets.extend(configuration.default_snippets)
        snippets.extend(self.snippets)
        return snippets

    def with_snippets(
        self, *snippets: Snippet, include_default_snippets: bool | None = None
    ) -> "RestDocumentationGenerator[RequestT, ResponseT]":
        """Copy of this generator that also writes ``snippets``."""
        return RestDocumentationGenerator(
            self.identifier,
            self.request_converter,
            self.response_converter,
            *self.snippets,
            *snippets,
            request_preprocessor=self.request_preprocessor,
            response_preprocessor=self.response_preprocessor,
            include_default_snippets=(
                self.include_default_snippets
                if include_default_snippets is None
                else include_default_snippets
            ),
        )
