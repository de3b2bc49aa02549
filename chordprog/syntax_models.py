"""Data models for tokens, concrete parse trees and the normalized AST."""

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    NOTE = "note"
    SEPARATOR = "separator"


class NodeKind(Enum):
    """Kinds of node that can appear in a concrete parse tree."""

    PROGRESSION = "progression"
    NOTE = "note"
    SEPARATOR = "separator"


class Note(str, Enum):
    """The seven natural note letters accepted by the grammar."""

    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    A = "A"
    B = "B"


#: Characters that lex as NOTE tokens.
NOTE_LETTERS: frozenset[str] = frozenset(note.value for note in Note)

SEPARATOR_CHAR = "-"


@dataclass(frozen=True)
class Token:
    """
    A single lexical unit.

    Attributes:
        kind:     NOTE or SEPARATOR.
        text:     The matched character.
        position: 0-based offset of the character in the caller's text.
    """

    kind: TokenKind
    text: str
    position: int


@dataclass(frozen=True)
class ConcreteNode:
    """A grammar-shaped parse tree node, separators included."""

    kind: NodeKind
    text: str
    position: int
    children: tuple["ConcreteNode", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NoteNode:
    """AST leaf holding one note letter."""

    value: Note


@dataclass(frozen=True)
class Progression:
    """AST root: the ordered notes of a progression."""

    notes: tuple[NoteNode, ...]

    @property
    def letters(self) -> list[str]:
        """Note letters in input order, e.g. ['C', 'E', 'G']."""
        return [note.value.value for note in self.notes]


AstNode = Progression | NoteNode
