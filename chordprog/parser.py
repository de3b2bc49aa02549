"""ProgressionParser: recursive-descent recognizer for the progression grammar.

Grammar::

    progression := note ('-' note)*
    note        := 'A' | 'B' | 'C' | 'D' | 'E' | 'F' | 'G'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chordprog.errors import ErrorKind, ParseError, ProgressionSyntaxError
from chordprog.lexer import tokenize
from chordprog.syntax_models import ConcreteNode, NodeKind, Token, TokenKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 4096


@dataclass(frozen=True)
class ParserConfig:
    """
    Input policy for the parser.

    Attributes:
        max_length:       Longest accepted input, counted after trimming.
        strip_whitespace: Trim surrounding whitespace before tokenizing.
                          Interior whitespace is always a lexical error.
    """

    max_length: int = DEFAULT_MAX_LENGTH
    strip_whitespace: bool = True


@dataclass(frozen=True)
class ParseResult:
    """Either a concrete tree rooted at ``progression`` or the error that stopped parsing."""

    text: str
    tree: ConcreteNode | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ConcreteNode:
        """Return the tree, or raise the stored ParseError."""
        if self.error is not None:
            raise self.error
        if self.tree is None:
            raise ValueError("ParseResult holds neither a tree nor an error.")
        return self.tree


class _Cursor:
    """Read position over one call's token list."""

    def __init__(self, tokens: list[Token], end_position: int) -> None:
        self.tokens = tokens
        self.index = 0
        self.end_position = end_position

    def peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token


class ProgressionParser:
    """
    Recognizes progressions such as ``C-F-G-C`` and builds a concrete tree.

    The tree keeps every token: the ``progression`` root owns NOTE and
    SEPARATOR children in input order. Parsing never raises for text input;
    failures come back inside the ParseResult.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _trim(self, text: str) -> tuple[str, int]:
        """Return the text to scan and its offset inside *text*."""
        if not self.config.strip_whitespace:
            return text, 0
        stripped = text.strip()
        if not stripped:
            return "", 0
        return stripped, len(text) - len(text.lstrip())

    def _parse_note(self, cursor: _Cursor) -> ConcreteNode:
        token = cursor.peek()
        if token is None:
            raise ProgressionSyntaxError(
                ErrorKind.UNEXPECTED_END,
                cursor.end_position,
                "expected a note after '-' but reached end of input",
            )
        if token.kind is not TokenKind.NOTE:
            raise ProgressionSyntaxError(
                ErrorKind.EXPECTED_NOTE,
                token.position,
                f"expected a note, found {token.text!r}",
            )
        cursor.advance()
        return ConcreteNode(NodeKind.NOTE, token.text, token.position)

    def _parse_progression(self, cursor: _Cursor, start: int) -> ConcreteNode:
        children = [self._parse_note(cursor)]

        while (token := cursor.peek()) is not None:
            if token.kind is TokenKind.NOTE:
                raise ProgressionSyntaxError(
                    ErrorKind.MISSING_SEPARATOR,
                    token.position,
                    f"expected '-' before note {token.text!r}",
                )
            cursor.advance()
            children.append(ConcreteNode(NodeKind.SEPARATOR, token.text, token.position))
            children.append(self._parse_note(cursor))

        text = "".join(child.text for child in children)
        return ConcreteNode(NodeKind.PROGRESSION, text, start, tuple(children))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_or_raise(self, text: str) -> ConcreteNode:
        """
        Parse *text* and return the concrete tree.

        Raises:
            LexicalError:           On a character outside the alphabet.
            ProgressionSyntaxError: On a grammar violation, empty input or
                                    input longer than ``config.max_length``.
        """
        body, offset = self._trim(text)

        if not body:
            raise ProgressionSyntaxError(ErrorKind.EMPTY_INPUT, offset, "empty progression")
        if len(body) > self.config.max_length:
            raise ProgressionSyntaxError(
                ErrorKind.INPUT_TOO_LONG,
                offset + self.config.max_length,
                f"input exceeds {self.config.max_length} characters",
            )

        tokens = tokenize(body, offset)
        logger.debug("Tokenized %d character(s) into %d token(s)", len(body), len(tokens))
        return self._parse_progression(_Cursor(tokens, offset + len(body)), offset)

    def parse(self, text: str) -> ParseResult:
        """Parse *text*, returning a ParseResult instead of raising."""
        try:
            tree = self.parse_or_raise(text)
        except ParseError as exc:
            logger.debug("Parse failed: %s", exc)
            return ParseResult(text=text, error=exc)
        return ParseResult(text=text, tree=tree)


def parse(text: str, config: ParserConfig | None = None) -> ParseResult:
    """Parse one progression with a fresh ProgressionParser."""
    return ProgressionParser(config).parse(text)
