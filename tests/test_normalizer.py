"""Unit tests for ASTNormalizer."""

import pytest

from chordprog.errors import PreconditionViolation
from chordprog.normalizer import ASTNormalizer, normalize
from chordprog.parser import parse
from chordprog.syntax_models import ConcreteNode, NodeKind, Note, NoteNode, Progression


def _tree(text: str) -> ConcreteNode:
    return parse(text).unwrap()


def test_normalize_single_note() -> None:
    assert normalize(_tree("C")) == Progression((NoteNode(Note.C),))


def test_normalize_drops_separators_and_keeps_order() -> None:
    ast = normalize(_tree("C-E-G"))
    assert ast == Progression((NoteNode(Note.C), NoteNode(Note.E), NoteNode(Note.G)))
    assert ast.letters == ["C", "E", "G"]


def test_normalize_keeps_duplicates() -> None:
    assert normalize(_tree("G-G-C-G")).letters == ["G", "G", "C", "G"]


def test_normalize_is_idempotent() -> None:
    tree = _tree("A-D-E-A")
    normalizer = ASTNormalizer()
    assert normalizer.normalize(tree) == normalizer.normalize(tree)


def test_normalize_rejects_non_progression_root() -> None:
    with pytest.raises(PreconditionViolation):
        normalize(ConcreteNode(NodeKind.NOTE, "C", 0))


def test_normalize_rejects_invalid_note_text() -> None:
    tree = ConcreteNode(
        NodeKind.PROGRESSION,
        "H",
        0,
        (ConcreteNode(NodeKind.NOTE, "H", 0),),
    )
    with pytest.raises(PreconditionViolation, match="'H'"):
        normalize(tree)


def test_normalize_rejects_progression_without_notes() -> None:
    tree = ConcreteNode(
        NodeKind.PROGRESSION,
        "-",
        0,
        (ConcreteNode(NodeKind.SEPARATOR, "-", 0),),
    )
    with pytest.raises(PreconditionViolation):
        normalize(tree)


def test_normalize_skips_children_of_other_kinds() -> None:
    tree = ConcreteNode(
        NodeKind.PROGRESSION,
        "D-F",
        0,
        (
            ConcreteNode(NodeKind.NOTE, "D", 0),
            ConcreteNode(NodeKind.PROGRESSION, "", 1),
            ConcreteNode(NodeKind.NOTE, "F", 2),
        ),
    )
    assert normalize(tree).letters == ["D", "F"]
