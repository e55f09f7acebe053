"""httpx integration: model converters and documentation event hooks.

- converters: httpx.Request/httpx.Response -> core operation models
- filters: request/response hooks that configure and document exchanges
"""

from .converters import (
    URL_TEMPLATE_KEY,
    HttpxRequestConverter,
    HttpxResponseConverter,
    path_template,
)
from .filters import (
    CONFIGURATION_KEY,
    RestDocumentationConfigurer,
    RestDocumentationFilter,
    register,
)

__all__ = [
    "CONFIGURATION_KEY",
    "URL_TEMPLATE_KEY",
    "HttpxRequestConverter",
    "HttpxResponseConverter",
    "RestDocumentationConfigurer",
    "RestDocumentationFilter",
    "path_template",
    "register",
]
