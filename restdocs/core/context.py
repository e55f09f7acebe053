"""Manual management of the documentation context.

The pytest plugin drives this class from a fixture; other harnesses call
``before_test``/``after_test`` themselves:

    documentation = ManualRestDocumentation("build/generated-snippets")
    with documentation.test("OrderApiTests", "create_order"):
        client.post(...)
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .models import RestDocumentationContext
from .ports import ContextProviderPort

logger = logging.getLogger(__name__)


class ManualRestDocumentation(ContextProviderPort):
    """Context provider whose test lifecycle is driven by the caller."""

    def __init__(self, output_directory: str | Path):
        self.output_directory = Path(output_directory)
        self._test: tuple[str, str] | None = None
        self._step_count = 0

    def before_test(self, test_class: str, test_method_name: str) -> None:
        """Start documenting a test. Step counting restarts at 1.

        Raises:
            RuntimeError: If the previous test was not finished.
        """
        if self._test is not None:
            raise RuntimeError(
                "before_test() called before after_test() for "
                f"{self._test[0]}.{self._test[1]}"
            )
        self._test = (test_class, test_method_name)
        self._step_count = 0
        logger.debug(f"Documentation context started for {test_class}.{test_method_name}")

    def after_test(self) -> None:
        self._test = None
        self._step_count = 0

    def before_operation(self) -> RestDocumentationContext:
        if self._test is None:
            raise RuntimeError(
                "before_operation() called outside a test; call before_test() first"
            )
        self._step_count += 1
        test_class, test_method_name = self._test
        return RestDocumentationContext(
            test_class=test_class,
            test_method_name=test_method_name,
            step_count=self._step_count,
            output_directory=self.output_directory,
        )

    @contextmanager
    def test(self, test_class: str, test_method_name: str) -> Iterator["ManualRestDocumentation"]:
        self.before_test(test_class, test_method_name)
        try:
            yield self
        finally:
            self.after_test()
