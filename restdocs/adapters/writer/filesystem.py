"""Filesystem snippet writer.

Implements WriterResolverPort by writing each snippet to
``<output directory>/<operation name>/<snippet name>.<extension>``.
"""

import logging
from pathlib import Path, PurePosixPath

from restdocs.core.models import RestDocumentationContext
from restdocs.core.ports import TemplateFormat, WriterResolverPort

logger = logging.getLogger(__name__)


class StandardWriterResolver(WriterResolverPort):
    """Writes snippets below the context's output directory."""

    def resolve(
        self,
        context: RestDocumentationContext,
        operation_name: str,
        snippet_name: str,
        template_format: TemplateFormat,
    ) -> Path:
        """Path the snippet is written to, without touching the filesystem.

        Relative output directories are resolved against the working
        directory.

        Raises:
            ValueError: If the operation name escapes the output directory.
        """
        name = PurePosixPath(operation_name)
        if name.is_absolute() or ".." in name.parts:
            raise ValueError(
                f"Operation name must be a relative path inside the output directory: "
                f"{operation_name!r}"
            )
        output_directory = Path(context.output_directory)
        if not output_directory.is_absolute():
            output_directory = Path.cwd() / output_directory
        return output_directory.joinpath(*name.parts) / (
            f"{snippet_name}.{template_format.file_extension}"
        )

    def write(
        self,
        context: RestDocumentationContext,
        operation_name: str,
        snippet_name: str,
        template_format: TemplateFormat,
        content: str,
        encoding: str = "utf-8",
    ) -> Path:
        path = self.resolve(context, operation_name, snippet_name, template_format)
        try:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OSError(f"Failed to create snippet directory {path.parent}: {e}") from e
            path.write_text(content, encoding=encoding)
        except OSError as e:
            logger.error(
                f"Failed to write {snippet_name} snippet: {e}",
                extra={"path": str(path)},
                exc_info=True,
            )
            raise
        return path
