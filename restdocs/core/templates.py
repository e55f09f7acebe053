"""Template formats snippets are rendered in.

Two formats are supported: Asciidoctor (the default) and Markdown.
"""

from collections.abc import Sequence

from .ports import TemplateFormat


class AsciidoctorTemplateFormat(TemplateFormat):
    """Renders snippets as Asciidoctor source."""

    id = "asciidoctor"
    file_extension = "adoc"

    def code_block(
        self, language: str | None, content: str, *, nowrap: bool = False
    ) -> str:
        attributes = ["source"]
        if language:
            attributes.append(language)
        if nowrap:
            attributes.append('options="nowrap"')
        return f"[{','.join(attributes)}]\n----\n{content}\n----"

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        title: str | None = None,
    ) -> str:
        lines = []
        if title:
            lines.append(f".+{title}+")
        lines.append("|===")
        lines.append("|" + "|".join(headers))
        for row in rows:
            lines.append("")
            lines.extend(f"|{self._escape(cell)}" for cell in row)
        lines.append("")
        lines.append("|===")
        return "\n".join(lines)

    def literal(self, text: str) -> str:
        return f"`+{text}+`" if "`" in text else f"`{text}`"

    @staticmethod
    def _escape(cell: str) -> str:
        return cell.replace("|", "\\|")


class MarkdownTemplateFormat(TemplateFormat):
    """Renders snippets as (GitHub flavoured) Markdown."""

    id = "markdown"
    file_extension = "md"

    def code_block(
        self, language: str | None, content: str, *, nowrap: bool = False
    ) -> str:
        return f"```{language or ''}\n{content}\n```"

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        title: str | None = None,
    ) -> str:
        lines = []
        if title:
            lines.append(title)
            lines.append("")
        lines.append(" | ".join(headers))
        lines.append(" | ".join("-" * len(header) for header in headers))
        for row in rows:
            lines.append(" | ".join(self._escape(cell) for cell in row))
        return "\n".join(lines)

    def literal(self, text: str) -> str:
        return f"`{text}`"

    @staticmethod
    def _escape(cell: str) -> str:
        return cell.replace("|", "\\|").replace("\n", " ")


_FORMATS: dict[str, type[TemplateFormat]] = {
    AsciidoctorTemplateFormat.id: AsciidoctorTemplateFormat,
    MarkdownTemplateFormat.id: MarkdownTemplateFormat,
}


def asciidoctor() -> TemplateFormat:
    return AsciidoctorTemplateFormat()


def markdown() -> TemplateFormat:
    return MarkdownTemplateFormat()


def template_format_for(format_id: str) -> TemplateFormat:
    """Look up a template format by id.

    Raises:
        ValueError: If the id is not a known format.
    """
    try:
        return _FORMATS[format_id.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown template format {format_id!r}, expected one of {sorted(_FORMATS)}"
        ) from None
