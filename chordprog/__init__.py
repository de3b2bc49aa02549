"""chordprog: parser for hyphen-separated chord progressions such as ``C-F-G-C``."""

from chordprog.errors import (
    ChordProgError,
    ExternalProcessingError,
    LexicalError,
    ParseError,
    PreconditionViolation,
    ProcessorNotReady,
    ProgressionSyntaxError,
)
from chordprog.normalizer import normalize
from chordprog.parser import ParserConfig, ParseResult, parse
from chordprog.serialization import interpret_response, to_json, to_payload
from chordprog.syntax_models import Note, NoteNode, Progression

__version__ = "0.1.0"

__all__ = [
    "ChordProgError",
    "ExternalProcessingError",
    "LexicalError",
    "Note",
    "NoteNode",
    "ParseError",
    "ParseResult",
    "ParserConfig",
    "PreconditionViolation",
    "ProcessorNotReady",
    "Progression",
    "ProgressionSyntaxError",
    "interpret_response",
    "normalize",
    "parse",
    "to_json",
    "to_payload",
]
