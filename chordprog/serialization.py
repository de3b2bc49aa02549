"""JSON boundary between the parser core and the external processing component.

Payload shape::

    {"type": "progression", "children": [{"type": "note", "text": "C"}, ...]}
"""

from __future__ import annotations

import json
import logging
from typing import Any

from chordprog.errors import ExternalProcessingError
from chordprog.syntax_models import AstNode, Note, NoteNode, Progression

logger = logging.getLogger(__name__)

TYPE_PROGRESSION = "progression"
TYPE_NOTE = "note"


def to_payload(ast: AstNode) -> dict[str, Any]:
    """Convert an AST value into the tagged ``type``/``children``/``text`` dict."""
    match ast:
        case Progression(notes=notes):
            return {"type": TYPE_PROGRESSION, "children": [to_payload(note) for note in notes]}
        case NoteNode(value=value):
            return {"type": TYPE_NOTE, "text": value.value}
    raise TypeError(f"Cannot serialize {type(ast).__name__}; expected Progression or NoteNode.")


def to_json(ast: AstNode, *, indent: int | None = None) -> str:
    """Serialize *ast* to the JSON string handed to the processing component."""
    separators = (",", ":") if indent is None else None
    return json.dumps(to_payload(ast), indent=indent, separators=separators)


def from_payload(data: Any) -> AstNode:
    """
    Rebuild an AST value from a decoded payload.

    Raises:
        ValueError: On an unknown ``type`` tag, a missing field, a note that
                    is not one of A-G, or a progression with no notes.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}.")

    node_type = data.get("type")
    if node_type == TYPE_NOTE:
        text = data.get("text")
        if not isinstance(text, str):
            raise ValueError("Note node is missing its 'text' field.")
        try:
            return NoteNode(Note(text))
        except ValueError:
            raise ValueError(f"Invalid note {text!r}; expected one of A-G.") from None

    if node_type == TYPE_PROGRESSION:
        children = data.get("children")
        if not isinstance(children, list):
            raise ValueError("Progression node is missing its 'children' list.")
        notes = []
        for child in children:
            node = from_payload(child)
            if not isinstance(node, NoteNode):
                raise ValueError("Progression children must be note nodes.")
            notes.append(node)
        if not notes:
            raise ValueError("Progression must contain at least one note.")
        return Progression(tuple(notes))

    raise ValueError(f"Unknown node type {node_type!r}.")


def from_json(raw: str) -> AstNode:
    """Decode a JSON payload string into an AST value."""
    return from_payload(json.loads(raw))


def interpret_response(raw: str) -> Any:
    """
    Decode the processing component's reply.

    An object carrying an ``error`` key is a failure; any other JSON value is
    the successful result and is returned unmodified.

    Raises:
        ExternalProcessingError: If the reply reports an error or is not JSON.
    """
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ExternalProcessingError(f"Processor returned invalid JSON: {exc}") from exc

    if isinstance(value, dict) and "error" in value:
        message = value["error"]
        logger.debug("Processor reported error: %r", message)
        raise ExternalProcessingError(str(message) if message else None)
    return value
