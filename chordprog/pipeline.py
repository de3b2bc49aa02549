"""ProgressionPipeline: text → concrete tree → AST → JSON → processor → result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from chordprog.errors import ChordProgError, ExternalProcessingError, ParseError, ProcessorNotReady
from chordprog.normalizer import ASTNormalizer
from chordprog.parser import ParserConfig, ProgressionParser
from chordprog.processors import ProgressionProcessor
from chordprog.serialization import interpret_response, to_json
from chordprog.syntax_models import Progression

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineOutcome:
    """
    Result of running one progression end to end.

    Attributes:
        text:   The input as supplied.
        ast:    The normalized AST, or None when parsing failed.
        result: The processor's decoded reply on success.
        error:  A ParseError or ExternalProcessingError on failure.
    """

    text: str
    ast: Progression | None = None
    result: Any = None
    error: ChordProgError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProgressionPipeline:
    """
    Composes parser, normalizer, serializer and a loaded processor.

    The processor is the readiness capability: construction fails with
    ProcessorNotReady unless ``processor.load()`` has already succeeded, so
    no parse call can happen against an uninitialized component.
    """

    def __init__(self, processor: ProgressionProcessor, config: ParserConfig | None = None) -> None:
        if not processor.ready:
            raise ProcessorNotReady("Processor not initialized; call load() before building a pipeline.")
        self.processor = processor
        self.parser = ProgressionParser(config)
        self.normalizer = ASTNormalizer()

    def analyze(self, text: str) -> Progression:
        """
        Parse and normalize *text* without contacting the processor.

        Raises:
            LexicalError, ProgressionSyntaxError: If *text* is rejected.
        """
        tree = self.parser.parse_or_raise(text)
        return self.normalizer.normalize(tree)

    def run(self, text: str) -> PipelineOutcome:
        """Process one progression; user-facing failures come back in the outcome."""
        try:
            ast = self.analyze(text)
        except ParseError as exc:
            return PipelineOutcome(text=text, error=exc)

        payload = to_json(ast)
        logger.debug("Sending %s as %s", "-".join(ast.letters), payload)
        try:
            result = interpret_response(self.processor.process(payload))
        except ExternalProcessingError as exc:
            logger.debug("Processing failed for %r: %s", text, exc)
            return PipelineOutcome(text=text, ast=ast, error=exc)

        return PipelineOutcome(text=text, ast=ast, result=result)
