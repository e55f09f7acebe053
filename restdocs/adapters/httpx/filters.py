"""httpx event hooks that document the exchanges a client makes.

Two kinds of hook objects cooperate on a client:

- RestDocumentationConfigurer stamps every request with the documentation
  configuration of the current test step.
- RestDocumentationFilter documents the exchange once the response has
  arrived, using the configuration found on its request.

Both are attached with ``register()``, which picks the async variants for
``httpx.AsyncClient``.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any

import httpx

from restdocs.adapters.writer.filesystem import StandardWriterResolver
from restdocs.core.configuration import SnippetConfiguration, UriConfiguration
from restdocs.core.generator import RestDocumentationGenerator, default_snippets
from restdocs.core.ports import (
    ContextProviderPort,
    Snippet,
    TemplateFormat,
    WriterResolverPort,
)
from restdocs.core.templates import asciidoctor

logger = logging.getLogger(__name__)

CONFIGURATION_KEY = "restdocs.configuration"

Hook = Callable[..., Any]


class RestDocumentationConfigurer:
    """Request hook attaching the per-operation configuration.

    ``before_operation()`` is called once per request, so every document
    filter on the same client shares the step of that request.
    """

    def __init__(
        self,
        context_provider: ContextProviderPort,
        writer: WriterResolverPort | None = None,
        template_format: TemplateFormat | None = None,
        encoding: str = "utf-8",
    ):
        self.context_provider = context_provider
        self.writer = writer or StandardWriterResolver()
        self.template_format = template_format or asciidoctor()
        self.encoding = encoding
        self.default_snippets: tuple[Snippet, ...] = tuple(default_snippets())
        self.uri_configuration = UriConfiguration()

    def uris(
        self,
        scheme: str | None = None,
        host: str | None = None,
        port: int | None = None,
        remove_port: bool = False,
    ) -> "RestDocumentationConfigurer":
        """Document requests as if they were sent to another origin.

        Calls accumulate: arguments left out keep their earlier value.
        Setting a port cancels an earlier ``remove_port`` and vice versa.

        Raises:
            ValueError: If both ``port`` and ``remove_port`` are given.
        """
        if port is not None and remove_port:
            raise ValueError("Cannot both set and remove the port of documented URIs")
        changes: dict[str, Any] = {
            name: value
            for name, value in (("scheme", scheme), ("host", host), ("port", port))
            if value is not None
        }
        if remove_port:
            changes.update(port=None, remove_port=True)
        elif port is not None:
            changes["remove_port"] = False
        self.uri_configuration = replace(self.uri_configuration, **changes)
        return self

    def snippets(
        self,
        defaults: Sequence[Snippet] | None = None,
        template_format: TemplateFormat | None = None,
        encoding: str | None = None,
    ) -> "RestDocumentationConfigurer":
        if defaults is not None:
            self.default_snippets = tuple(defaults)
        if template_format is not None:
            self.template_format = template_format
        if encoding is not None:
            self.encoding = encoding
        return self

    def configuration(self) -> SnippetConfiguration:
        """Begin a new operation and return its configuration."""
        return SnippetConfiguration(
            context=self.context_provider.before_operation(),
            writer=self.writer,
            template_format=self.template_format,
            default_snippets=self.default_snippets,
            uris=self.uri_configuration,
            encoding=self.encoding,
        )

    def request_hook(self, request: httpx.Request) -> None:
        request.read()
        request.extensions[CONFIGURATION_KEY] = self.configuration()

    async def async_request_hook(self, request: httpx.Request) -> None:
        await request.aread()
        request.extensions[CONFIGURATION_KEY] = self.configuration()

    def event_hooks(self, asynchronous: bool = False) -> dict[str, list[Hook]]:
        if asynchronous:
            return {"request": [self.async_request_hook], "response": []}
        return {"request": [self.request_hook], "response": []}


class RestDocumentationFilter:
    """Request and response hooks documenting each exchange.

    Failures while generating documentation are raised as
    ``httpx.RequestError`` with the original error as ``__cause__``.
    Errors raised by httpx while reading bodies propagate unchanged.
    """

    def __init__(self, generator: RestDocumentationGenerator[httpx.Request, httpx.Response]):
        self.generator = generator

    @property
    def identifier(self) -> str:
        return self.generator.identifier

    def document(self, *snippets: Snippet) -> "RestDocumentationFilter":
        """A filter writing ``snippets`` in addition to this filter's own.

        The default snippets are not written by the returned filter.
        """
        return RestDocumentationFilter(
            self.generator.with_snippets(*snippets, include_default_snippets=False)
        )

    def request_hook(self, request: httpx.Request) -> None:
        request.read()

    def response_hook(self, response: httpx.Response) -> None:
        response.read()
        self._document(response)

    async def async_request_hook(self, request: httpx.Request) -> None:
        await request.aread()

    async def async_response_hook(self, response: httpx.Response) -> None:
        await response.aread()
        await asyncio.to_thread(self._document, response)

    def event_hooks(self, asynchronous: bool = False) -> dict[str, list[Hook]]:
        if asynchronous:
            return {
                "request": [self.async_request_hook],
                "response": [self.async_response_hook],
            }
        return {"request": [self.request_hook], "response": [self.response_hook]}

    def _document(self, response: httpx.Response) -> None:
        request = response.request
        configuration = request.extensions.get(CONFIGURATION_KEY)
        try:
            self.generator.handle(request, response, configuration)
        except Exception as e:
            logger.error(
                f"Failed to document operation '{self.identifier}': {e}",
                extra={"method": request.method, "url": str(request.url)},
                exc_info=True,
            )
            raise httpx.RequestError(
                f"Failed to document operation '{self.identifier}': {e}",
                request=request,
            ) from e


HookProvider = RestDocumentationConfigurer | RestDocumentationFilter


def register(client: httpx.Client | httpx.AsyncClient, *providers: HookProvider):
    """Append the hooks of ``providers`` to the client's event hooks.

    Returns:
        The client, for chaining.
    """
    asynchronous = isinstance(client, httpx.AsyncClient)
    event_hooks = client.event_hooks
    for provider in providers:
        for event, hooks in provider.event_hooks(asynchronous).items():
            event_hooks.setdefault(event, []).extend(hooks)
    client.event_hooks = event_hooks
    return client
