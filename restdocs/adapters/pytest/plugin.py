"""pytest plugin providing the documentation context as fixtures.

Registered through the ``pytest11`` entry point, so installing the
package is enough:

    def test_get_order(rest_documentation):
        client = register(
            TestClient(app),
            documentation_configuration(rest_documentation),
            document("{method-name}"),
        )
        client.get("/orders/1")

Override ``restdocs_output_directory`` in a conftest.py to write snippets
somewhere else.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from restdocs.config import Settings, load_settings
from restdocs.core.context import ManualRestDocumentation

logger = logging.getLogger(__name__)


def _test_class_name(request: pytest.FixtureRequest) -> str:
    if request.cls is not None:
        return request.cls.__name__
    return request.module.__name__.rpartition(".")[2]


def _test_method_name(request: pytest.FixtureRequest) -> str:
    return getattr(request.node, "originalname", None) or request.node.name


@pytest.fixture
def restdocs_settings() -> Settings:
    """Settings loaded from RESTDOCS_* environment variables and .env."""
    return load_settings()


@pytest.fixture
def restdocs_output_directory(restdocs_settings: Settings) -> Path:
    return Path(restdocs_settings.output_directory)


@pytest.fixture
def rest_documentation(
    request: pytest.FixtureRequest,
    restdocs_settings: Settings,
    restdocs_output_directory: Path,
) -> Iterator[ManualRestDocumentation]:
    """Documentation context started for the requesting test."""
    logging.getLogger("restdocs").setLevel(restdocs_settings.log_level)
    documentation = ManualRestDocumentation(restdocs_output_directory)
    with documentation.test(_test_class_name(request), _test_method_name(request)):
        yield documentation
