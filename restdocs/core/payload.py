"""Snippets documenting the fields of JSON request and response payloads.

Field paths use dots to descend into objects and ``[]`` to descend into
every item of an array:

    id                  top-level field
    owner.name          field of a nested object
    items[].sku         field of every object in the items array
    []                  the items of a top-level array
    ['a.b']             a key containing a dot

Documenting an object or array also documents everything below it.
"""

import copy
import json
from abc import abstractmethod
from collections.abc import Sequence
from typing import Any

from .descriptors import FieldDescriptor, JsonFieldType
from .errors import FieldTypeMismatchError, FieldTypeRequiredError, SnippetError
from .models import Operation
from .ports import Snippet, TemplateFormat


class _ArraySegment:
    def __repr__(self) -> str:
        return "[]"


ARRAY = _ArraySegment()

Segment = str | _ArraySegment


def parse_field_path(path: str) -> tuple[Segment, ...]:
    """Split a field path into key and array segments.

    Raises:
        ValueError: If the path has an unterminated bracket.
    """
    segments: list[Segment] = []
    index = 0
    while index < len(path):
        if path.startswith("[]", index):
            segments.append(ARRAY)
            index += 2
        elif path.startswith("['", index):
            end = path.find("']", index + 2)
            if end == -1:
                raise ValueError(f"Unterminated bracket in field path '{path}'")
            segments.append(path[index + 2:end])
            index = end + 2
        elif path[index] == ".":
            index += 1
        else:
            end = index
            while end < len(path) and path[end] not in ".[":
                end += 1
            segments.append(path[index:end])
            index = end
    if not segments:
        raise ValueError(f"Field path '{path}' has no segments")
    return tuple(segments)


def find_values(payload: Any, segments: Sequence[Segment]) -> list[Any]:
    """All values the path matches in ``payload``.

    An array segment at the end of the path matches the array itself.
    """
    if not segments:
        return [payload]
    head, rest = segments[0], segments[1:]
    if head is ARRAY:
        if not isinstance(payload, list):
            return []
        if not rest:
            return [payload]
        return [value for item in payload for value in find_values(item, rest)]
    if isinstance(payload, dict) and head in payload:
        return find_values(payload[head], rest)
    return []


def remove_field(payload: Any, segments: Sequence[Segment]) -> bool:
    """Remove the matched field from ``payload`` in place.

    Containers left empty by the removal are removed as well, while
    containers that were empty to begin with are kept.

    Returns:
        True if anything was removed.
    """
    head, rest = segments[0], segments[1:]
    if head is ARRAY:
        if not isinstance(payload, list):
            return False
        if not rest:
            payload.clear()
            return True
        removed = False
        survivors = []
        for item in payload:
            if remove_field(item, rest):
                removed = True
                if _is_empty_container(item):
                    continue
            survivors.append(item)
        payload[:] = survivors
        return removed
    if not isinstance(payload, dict) or head not in payload:
        return False
    if not rest:
        del payload[head]
        return True
    child = payload[head]
    if remove_field(child, rest):
        if _is_empty_container(child):
            del payload[head]
        return True
    return False


def _is_empty_container(value: Any) -> bool:
    return isinstance(value, (dict, list)) and not value


def field_type_of(value: Any) -> JsonFieldType:
    if value is None:
        return JsonFieldType.NULL
    if isinstance(value, bool):
        return JsonFieldType.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonFieldType.NUMBER
    if isinstance(value, str):
        return JsonFieldType.STRING
    if isinstance(value, list):
        return JsonFieldType.ARRAY
    return JsonFieldType.OBJECT


def resolve_field_type(values: Sequence[Any]) -> JsonFieldType:
    types = {field_type_of(value) for value in values}
    if len(types) == 1:
        return types.pop()
    return JsonFieldType.VARIES


class _FieldsSnippet(Snippet):
    """Validates a JSON payload against field descriptors and tabulates them."""

    side: str

    def __init__(self, descriptors: Sequence[FieldDescriptor], relaxed: bool = False):
        for descriptor in descriptors:
            if descriptor.description is None and not descriptor.ignored:
                raise ValueError(
                    f"The descriptor for field '{descriptor.path}' must either have a "
                    "description or be marked as ignored"
                )
        self.descriptors = tuple(descriptors)
        self.relaxed = relaxed
        self._paths = {
            descriptor.path: parse_field_path(descriptor.path)
            for descriptor in self.descriptors
        }

    @abstractmethod
    def payload_of(self, operation: Operation) -> tuple[bytes, str]:
        """Raw body and its decoded text."""

    def render(self, operation: Operation, template_format: TemplateFormat) -> str:
        payload = self._read_payload(operation)
        self._verify(payload)
        rows = [
            (
                template_format.literal(descriptor.path),
                template_format.literal(str(self._field_type(descriptor, payload))),
                descriptor.description or "",
            )
            for descriptor in self.descriptors
            if not descriptor.ignored
        ]
        return template_format.table(("Path", "Type", "Description"), rows)

    def _read_payload(self, operation: Operation) -> Any:
        content, text = self.payload_of(operation)
        if not content:
            if not self.descriptors:
                return {}
            raise SnippetError(
                f"Cannot document {self.side} fields as the {self.side} body is empty"
            )
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SnippetError(
                f"Cannot document {self.side} fields as the {self.side} body is not valid JSON: {e}"
            ) from e

    def _verify(self, payload: Any) -> None:
        messages = []

        if not self.relaxed:
            undocumented = self._undocumented_content(payload)
            if undocumented is not None:
                messages.append(
                    "The following parts of the payload were not documented:\n"
                    + json.dumps(undocumented, indent=2)
                )

        missing = [
            descriptor.path
            for descriptor in self.descriptors
            if not descriptor.optional
            and not find_values(payload, self._paths[descriptor.path])
        ]
        if missing:
            messages.append(
                "Fields with the following paths were not found in the payload: "
                + "[" + ", ".join(missing) + "]"
            )

        if messages:
            raise SnippetError("\n".join(messages))

    def _undocumented_content(self, payload: Any) -> Any:
        if not isinstance(payload, (dict, list)):
            return None
        remainder = copy.deepcopy(payload)
        for descriptor in self.descriptors:
            remove_field(remainder, self._paths[descriptor.path])
        return remainder if remainder else None

    def _field_type(self, descriptor: FieldDescriptor, payload: Any) -> JsonFieldType | str:
        values = find_values(payload, self._paths[descriptor.path])
        if not values:
            if descriptor.type is None:
                raise FieldTypeRequiredError(
                    f"Cannot determine the type of the field '{descriptor.path}' as it "
                    "is not present in the payload. Please provide a type using "
                    "field_with_path(..., type=...)."
                )
            return descriptor.type

        actual = resolve_field_type(values)
        declared = descriptor.type
        if declared is None:
            return actual
        if isinstance(declared, JsonFieldType) and declared is not JsonFieldType.VARIES:
            # Null stands in for an absent value of an optional field
            tolerated = descriptor.optional and actual is JsonFieldType.NULL
            if declared is not actual and not tolerated:
                raise FieldTypeMismatchError(
                    f"The documented type of the field '{descriptor.path}' is "
                    f"{declared} but the actual type is {actual}"
                )
        return declared


class RequestFieldsSnippet(_FieldsSnippet):
    name = "request-fields"
    side = "request"

    def payload_of(self, operation: Operation) -> tuple[bytes, str]:
        request = operation.request
        return request.content, request.content_as_string


class ResponseFieldsSnippet(_FieldsSnippet):
    name = "response-fields"
    side = "response"

    def payload_of(self, operation: Operation) -> tuple[bytes, str]:
        response = operation.response
        return response.content, response.content_as_string


def request_fields(*descriptors: FieldDescriptor, relaxed: bool = False) -> Snippet:
    return RequestFieldsSnippet(descriptors, relaxed=relaxed)


def response_fields(*descriptors: FieldDescriptor, relaxed: bool = False) -> Snippet:
    return ResponseFieldsSnippet(descriptors, relaxed=relaxed)
