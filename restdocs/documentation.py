"""Entry points for documenting httpx exchanges.

This module wires the httpx adapters to the documentation core:

    documentation = ManualRestDocumentation("build/generated-snippets")

    with documentation.test("OrderApiTests", "create_order"):
        client = register(
            httpx.Client(base_url="http://localhost:8080"),
            documentation_configuration(documentation),
            document("create-order", response_fields(...)),
        )
        client.post("/orders", json={...})
"""

import logging

from restdocs.adapters.httpx.converters import HttpxRequestConverter, HttpxResponseConverter
from restdocs.adapters.httpx.filters import (
    RestDocumentationConfigurer,
    RestDocumentationFilter,
    register,
)
from restdocs.config import Settings, load_settings
from restdocs.core.generator import RestDocumentationGenerator
from restdocs.core.ports import ContextProviderPort, OperationPreprocessor, Snippet
from restdocs.core.preprocess import (
    OperationRequestPreprocessor,
    OperationResponsePreprocessor,
    preprocess_request,
    preprocess_response,
)
from restdocs.core.templates import template_format_for

logger = logging.getLogger(__name__)


def document(
    identifier: str,
    *snippets_and_preprocessors: Snippet | OperationPreprocessor,
    request_preprocessor: OperationPreprocessor | None = None,
    response_preprocessor: OperationPreprocessor | None = None,
) -> RestDocumentationFilter:
    """Create a filter documenting exchanges under ``identifier``.

    Preprocessors may be passed positionally among the snippets. Request
    preprocessor chains built with ``preprocess_request()`` apply to the
    request, those built with ``preprocess_response()`` to the response,
    and any other preprocessor to both.

    Args:
        identifier: Operation identifier, may contain placeholders such as
            ``{method-name}`` and ``{step}``.
        *snippets_and_preprocessors: Snippets written in addition to the
            default snippets, and preprocessors.
        request_preprocessor: Applied to the request before rendering.
        response_preprocessor: Applied to the response before rendering.

    Returns:
        A filter to register on a client with ``register()``.
    """
    snippets: list[Snippet] = []
    request_preprocessors: list[OperationPreprocessor] = []
    response_preprocessors: list[OperationPreprocessor] = []
    if request_preprocessor is not None:
        request_preprocessors.append(request_preprocessor)
    if response_preprocessor is not None:
        response_preprocessors.append(response_preprocessor)

    for item in snippets_and_preprocessors:
        if isinstance(item, Snippet):
            snippets.append(item)
        elif isinstance(item, OperationPreprocessor):
            if not _is_response_chain(item):
                request_preprocessors.append(item)
            if not _is_request_chain(item):
                response_preprocessors.append(item)
        else:
            raise TypeError(
                f"Expected a snippet or a preprocessor, got {type(item).__name__}"
            )

    generator = RestDocumentationGenerator(
        identifier,
        HttpxRequestConverter(),
        HttpxResponseConverter(),
        *snippets,
        request_preprocessor=preprocess_request(*request_preprocessors),
        response_preprocessor=preprocess_response(*response_preprocessors),
    )
    return RestDocumentationFilter(generator)


def _is_request_chain(preprocessor: OperationPreprocessor) -> bool:
    return isinstance(preprocessor, OperationRequestPreprocessor)


def _is_response_chain(preprocessor: OperationPreprocessor) -> bool:
    return isinstance(preprocessor, OperationResponsePreprocessor)


def documentation_configuration(
    context_provider: ContextProviderPort, settings: Settings | None = None
) -> RestDocumentationConfigurer:
    """Create the configurer that starts each documented operation.

    Args:
        context_provider: Supplies the test context, usually a
            ManualRestDocumentation.
        settings: Defaults for template format, encoding and documented
            URIs. Loaded from the environment when omitted.

    Returns:
        A configurer to register on a client with ``register()``.
    """
    settings = settings or load_settings()
    configurer = RestDocumentationConfigurer(
        context_provider,
        template_format=template_format_for(settings.template_format),
        encoding=settings.snippet_encoding,
    )
    if settings.uri_scheme or settings.uri_host or settings.uri_port:
        configurer.uris(
            scheme=settings.uri_scheme, host=settings.uri_host, port=settings.uri_port
        )
        logger.debug(
            "Documented URIs overridden from settings",
            extra={
                "scheme": settings.uri_scheme,
                "host": settings.uri_host,
                "port": settings.uri_port,
            },
        )
    return configurer


__all__ = ["document", "documentation_configuration", "register"]
