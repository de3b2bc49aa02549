"""Exception hierarchy for parsing, normalization and external processing."""

from enum import Enum

DEFAULT_PROCESSING_ERROR = "Chord progression processing error"


class ErrorKind(Enum):
    """What went wrong while recognizing a progression."""

    UNEXPECTED_CHARACTER = "unexpected character"
    EMPTY_INPUT = "empty progression"
    INPUT_TOO_LONG = "input too long"
    EXPECTED_NOTE = "expected a note"
    UNEXPECTED_END = "unexpected end of input"
    MISSING_SEPARATOR = "missing '-' between notes"


class ChordProgError(Exception):
    """Base class for every error raised by chordprog."""


class ParseError(ChordProgError):
    """
    A rejected input, located at a character offset.

    Attributes:
        kind:     Category of the failure.
        position: 0-based offset into the caller's original text.
        message:  Human-readable explanation without the position.
    """

    def __init__(self, kind: ErrorKind, position: int, message: str) -> None:
        super().__init__(f"{message} at position {position}")
        self.kind = kind
        self.position = position
        self.message = message

    def describe(self, text: str) -> str:
        """Render the error with the input and a caret under the offending column."""
        pointer = " " * self.position + "^"
        return f"{self}\n  {text}\n  {pointer}"


class LexicalError(ParseError):
    """A character outside the alphabet {A-G, '-'}."""

    def __init__(self, position: int, char: str) -> None:
        super().__init__(
            ErrorKind.UNEXPECTED_CHARACTER,
            position,
            f"unexpected character {char!r}",
        )
        self.char = char


class ProgressionSyntaxError(ParseError):
    """A token sequence that does not match ``note ('-' note)*``."""


class PreconditionViolation(ChordProgError):
    """Normalization was called on a tree the parser could not have produced."""


class ExternalProcessingError(ChordProgError):
    """The processing component reported a failure; the message is passed through."""

    def __init__(self, message: str | None = None) -> None:
        self.message = message or DEFAULT_PROCESSING_ERROR
        super().__init__(self.message)


class ProcessorNotReady(ChordProgError, RuntimeError):
    """A processor was used before ``load()`` completed."""
