"""ProgressionProcessor: Strategy pattern for the external JSON-in/JSON-out processing step."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from chordprog.errors import ExternalProcessingError, ProcessorNotReady

logger = logging.getLogger(__name__)


class ProgressionProcessor(ABC):
    """
    Abstract adapter for the component that interprets a serialized AST.

    A processor must be loaded once before use:

        with CommandProcessor("chord-processor") as processor:
            reply = processor.process(payload)

    ``load()`` performs any one-time initialization; ``process()`` on a
    processor that was never loaded raises ProcessorNotReady.
    """

    def __init__(self) -> None:
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def _load(self) -> None:
        """One-time initialization hook for subclasses."""

    @abstractmethod
    def _process(self, payload: str) -> str:
        """Send *payload* to the component and return its raw JSON reply."""

    def load(self) -> ProgressionProcessor:
        """Initialize the processor and mark it ready. Safe to call twice."""
        if not self._ready:
            self._load()
            self._ready = True
            logger.debug("%s ready", type(self).__name__)
        return self

    def process(self, payload: str) -> str:
        """
        Hand a JSON payload to the processing component.

        Args:
            payload: AST serialized by ``serialization.to_json``.

        Returns:
            The component's reply, still JSON-encoded.

        Raises:
            ProcessorNotReady:       If ``load()`` has not been called.
            ExternalProcessingError: If the component could not be reached.
        """
        if not self._ready:
            raise ProcessorNotReady(f"{type(self).__name__} not initialized; call load() first.")
        return self._process(payload)

    def close(self) -> None:
        self._ready = False

    def __enter__(self) -> ProgressionProcessor:
        return self.load()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class CallableProcessor(ProgressionProcessor):
    """Wraps an in-process ``str -> str`` function as a processor."""

    def __init__(self, func: Callable[[str], str]) -> None:
        super().__init__()
        self.func = func

    def _process(self, payload: str) -> str:
        return self.func(payload)


class CommandProcessor(ProgressionProcessor):
    """
    Runs an external executable once per progression.

    The payload is written to the command's stdin and the reply is read from
    its stdout as UTF-8. A non-zero exit status, a timeout, a command the OS
    cannot start, or a reply that is not UTF-8 is reported as an
    ExternalProcessingError.
    """

    DEFAULT_TIMEOUT = 10.0  # seconds

    def __init__(self, command: str | Sequence[str], timeout: float = DEFAULT_TIMEOUT) -> None:
        """
        Args:
            command: Executable plus arguments, either as a shell-style string
                     or an argument list.
            timeout: Seconds to wait for a reply before giving up.
        """
        super().__init__()
        self.argv = shlex.split(command) if isinstance(command, str) else list(command)
        self.timeout = timeout
        if not self.argv:
            raise ValueError("command must name an executable.")

    def _load(self) -> None:
        resolved = shutil.which(self.argv[0])
        if resolved is None:
            raise FileNotFoundError(
                f"Processor executable '{self.argv[0]}' not found. "
                "Check the command or your PATH."
            )
        self.argv[0] = resolved

    def _process(self, payload: str) -> str:
        logger.debug("Running %s", shlex.join(self.argv))
        try:
            completed = subprocess.run(
                self.argv,
                input=payload.encode("utf-8"),
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ExternalProcessingError(
                f"Processor timed out after {self.timeout:g}s"
            ) from exc
        except OSError as exc:
            raise ExternalProcessingError(f"Processor could not run: {exc}") from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            detail = stderr or f"exit status {completed.returncode}"
            raise ExternalProcessingError(f"Processor failed: {detail}")

        try:
            return completed.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ExternalProcessingError("Processor returned non-UTF-8 output") from exc
