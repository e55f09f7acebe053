"""Resolution of placeholders in operation identifiers.

An identifier such as ``"{class-name}/{method-name}-{step}"`` is expanded
from the test context, so one ``document()`` call can be shared between
tests. Supported placeholders:

    {method-name}  {method_name}  {methodName}
    {class-name}   {class_name}   {ClassName}
    {step}
"""

import re
from collections.abc import Callable

from .models import RestDocumentationContext

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[_\-\s.]+")


def _words(name: str) -> list[str]:
    return [word for word in _WORD_BOUNDARY.split(name) if word]


def kebab_case(name: str) -> str:
    return "-".join(word.lower() for word in _words(name))


def snake_case(name: str) -> str:
    return "_".join(word.lower() for word in _words(name))


def camel_case(name: str) -> str:
    words = _words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def pascal_case(name: str) -> str:
    return "".join(word[0].upper() + word[1:] for word in _words(name))


_RESOLVERS: dict[str, Callable[[RestDocumentationContext], str]] = {
    "method-name": lambda context: kebab_case(context.test_method_name),
    "method_name": lambda context: snake_case(context.test_method_name),
    "methodName": lambda context: camel_case(context.test_method_name),
    "class-name": lambda context: kebab_case(context.test_class),
    "class_name": lambda context: snake_case(context.test_class),
    "ClassName": lambda context: context.test_class,
    "step": lambda context: str(context.step_count),
}


def resolve_placeholders(identifier: str, context: RestDocumentationContext) -> str:
    """Expand the placeholders in ``identifier``.

    Raises:
        ValueError: If the identifier uses an unknown placeholder.
    """

    def resolve(match: re.Match[str]) -> str:
        name = match.group(1)
        try:
            return _RESOLVERS[name](context)
        except KeyError:
            raise ValueError(
                f"Unknown placeholder {{{name}}} in operation identifier '{identifier}'"
            ) from None

    return _PLACEHOLDER.sub(resolve, identifier)
