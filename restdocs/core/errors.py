"""Errors raised while documenting an operation."""


class SnippetError(Exception):
    """A snippet could not be produced for the documented operation.

    Raised when descriptors and the observed request/response disagree,
    for example an undocumented query parameter or a documented field
    that is not in the payload.
    """


class FieldTypeMismatchError(SnippetError):
    """A field's documented type differs from its type in the payload."""


class FieldTypeRequiredError(SnippetError):
    """A field's type cannot be determined and none was documented."""


class MissingConfigurationError(SnippetError):
    """No documentation configuration was attached to the request."""
