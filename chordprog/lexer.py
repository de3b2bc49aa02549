"""Lexer: splits progression text into single-character NOTE and SEPARATOR tokens."""

import logging

from chordprog.errors import LexicalError
from chordprog.syntax_models import NOTE_LETTERS, SEPARATOR_CHAR, Token, TokenKind

logger = logging.getLogger(__name__)


def tokenize(text: str, offset: int = 0) -> list[Token]:
    """
    Turn *text* into a list of tokens, one per character.

    There are no multi-character tokens: sharps, flats, octave numbers,
    lowercase letters and whitespace are all rejected.

    Args:
        text:   The characters to scan (already trimmed by the caller if
                trimming is wanted).
        offset: Added to every reported position, so that positions refer to
                the caller's untrimmed input.

    Returns:
        Tokens in input order.

    Raises:
        LexicalError: At the first character outside {A-G, '-'}.
    """
    tokens: list[Token] = []
    for index, char in enumerate(text):
        position = offset + index
        if char in NOTE_LETTERS:
            tokens.append(Token(TokenKind.NOTE, char, position))
        elif char == SEPARATOR_CHAR:
            tokens.append(Token(TokenKind.SEPARATOR, char, position))
        else:
            logger.debug("Rejected character %r at position %d", char, position)
            raise LexicalError(position, char)
    return tokens
