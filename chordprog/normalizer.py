"""ASTNormalizer: reduces a concrete parse tree to the minimal progression AST."""

import logging

from chordprog.errors import PreconditionViolation
from chordprog.syntax_models import ConcreteNode, NodeKind, Note, NoteNode, Progression

logger = logging.getLogger(__name__)


class ASTNormalizer:
    """
    Walks a ``progression``-rooted concrete tree and keeps only its notes.

    Algorithm
    ---------
    Children are visited left to right. NOTE children become NoteNode values
    appended in the same order; children of any other kind carry no meaning
    and are dropped. Notes are never reordered or deduplicated, so the output is an
    order-preserving projection of the input.

    Any tree returned by ProgressionParser satisfies the preconditions. A
    tree that does not is a caller bug and raises PreconditionViolation.
    """

    def _note(self, node: ConcreteNode) -> NoteNode:
        try:
            return NoteNode(Note(node.text))
        except ValueError:
            raise PreconditionViolation(
                f"note node at position {node.position} holds {node.text!r}, not a note letter"
            ) from None

    def normalize(self, tree: ConcreteNode) -> Progression:
        """
        Convert a concrete tree into a Progression.

        Raises:
            PreconditionViolation: If *tree* is not rooted at ``progression``
                                   or contains no valid notes.
        """
        if tree.kind is not NodeKind.PROGRESSION:
            raise PreconditionViolation(
                f"normalize() expects a progression root, got {tree.kind.value!r}"
            )

        notes: list[NoteNode] = []
        for child in tree.children:
            match child.kind:
                case NodeKind.NOTE:
                    notes.append(self._note(child))
                case NodeKind.SEPARATOR | NodeKind.PROGRESSION:
                    continue

        if not notes:
            raise PreconditionViolation("progression tree has no note children")

        logger.debug("Normalized progression of %d note(s)", len(notes))
        return Progression(tuple(notes))


def normalize(tree: ConcreteNode) -> Progression:
    """Normalize *tree* with a shared stateless ASTNormalizer."""
    return _NORMALIZER.normalize(tree)


_NORMALIZER = ASTNormalizer()
