"""Shared fixtures: stand-in processing components."""

import json
import shlex
import sys
from pathlib import Path

import pytest

PROCESSOR_SCRIPT = """\
import json
import sys

ast = json.load(sys.stdin)
letters = [child["text"] for child in ast["children"]]
if "B" in letters:
    print(json.dumps({"error": "invalid voicing"}))
else:
    print(json.dumps(letters))
"""

FAILING_SCRIPT = """\
import sys

sys.stdin.read()
sys.stderr.write("processor crashed\\n")
sys.exit(3)
"""


def _letters(payload: str) -> str:
    ast = json.loads(payload)
    letters = [child["text"] for child in ast["children"]]
    if "B" in letters:
        return json.dumps({"error": "invalid voicing"})
    return json.dumps(letters)


def _script_command(tmp_path: Path, name: str, source: str) -> str:
    script = tmp_path / name
    script.write_text(source, encoding="utf-8")
    return shlex.join([sys.executable, str(script)])


@pytest.fixture
def processor_command(tmp_path: Path) -> str:
    return _script_command(tmp_path, "processor.py", PROCESSOR_SCRIPT)


@pytest.fixture
def failing_command(tmp_path: Path) -> str:
    return _script_command(tmp_path, "failing.py", FAILING_SCRIPT)


@pytest.fixture
def letters_processor():
    """In-process processor: returns the note letters, or an error if B is present."""
    return _letters


SLEEPING_SCRIPT = """\
import time

time.sleep(5)
"""

BINARY_REPLY_SCRIPT = """\
import sys

sys.stdin.read()
sys.stdout.buffer.write(b"\\xff\\xfe")
"""


@pytest.fixture
def sleeping_command(tmp_path: Path) -> str:
    return _script_command(tmp_path, "sleeping.py", SLEEPING_SCRIPT)


@pytest.fixture
def binary_reply_command(tmp_path: Path) -> str:
    return _script_command(tmp_path, "binary_reply.py", BINARY_REPLY_SCRIPT)


@pytest.fixture
def unlaunchable_command(tmp_path: Path) -> list[str]:
    """An executable file with no shebang; the OS refuses to start it."""
    script = tmp_path / "no_shebang"
    script.write_text("C-F-G\n", encoding="utf-8")
    script.chmod(0o755)
    return [str(script)]
