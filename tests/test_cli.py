"""CLI tests using click's CliRunner."""

import json

import pytest
from click.testing import CliRunner

from chordprog import __version__
from chordprog.cli import EMPTY_INPUT_MESSAGE, main


def _invoke(*args: str, **kwargs):
    return CliRunner().invoke(main, list(args), **kwargs)


def test_version_option() -> None:
    result = _invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_parse_prints_ast_json() -> None:
    result = _invoke("parse", "C-E-G")
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "type": "progression",
        "children": [
            {"type": "note", "text": "C"},
            {"type": "note", "text": "E"},
            {"type": "note", "text": "G"},
        ],
    }


def test_parse_compact_output() -> None:
    result = _invoke("parse", "C", "--compact")
    assert result.exit_code == 0
    assert result.output.strip() == '{"type":"progression","children":[{"type":"note","text":"C"}]}'


def test_parse_error_points_at_offending_character() -> None:
    result = _invoke("parse", "A-H")
    assert result.exit_code == 1
    assert "unexpected character 'H' at position 2" in result.output
    assert "    ^" in result.output


def test_parse_empty_input_message() -> None:
    result = _invoke("parse", "  ")
    assert result.exit_code == 1
    assert EMPTY_INPUT_MESSAGE in result.output


def test_max_length_option() -> None:
    result = _invoke("--max-length", "3", "parse", "C-D-E")
    assert result.exit_code == 1
    assert "input exceeds 3 characters" in result.output


def test_max_length_from_environment() -> None:
    result = _invoke("parse", "C-D-E", env={"CHORDPROG_MAX_LENGTH": "3"})
    assert result.exit_code == 1


def test_check_reports_each_line() -> None:
    result = _invoke("check", input="C-F-G\n\nC--D\nA\n")
    assert result.exit_code == 1
    assert "1: ok     C-F-G" in result.output
    assert "3: error  expected a note, found '-' at position 2" in result.output
    assert "4: ok     A" in result.output
    assert "1 progression(s) rejected." in result.output


def test_check_all_valid_exits_zero(tmp_path) -> None:
    source = tmp_path / "progressions.txt"
    source.write_text("C-F-G-C\nA-D-E\n", encoding="utf-8")
    result = _invoke("check", str(source))
    assert result.exit_code == 0


def test_process_missing_executable() -> None:
    result = _invoke("process", "C", "--processor", "chordprog-no-such-processor")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_process_requires_processor_option() -> None:
    result = _invoke("process", "C", env={"CHORDPROG_PROCESSOR": None})
    assert result.exit_code != 0


@pytest.mark.integration
def test_process_prints_result(processor_command: str) -> None:
    result = _invoke("process", "C-F-G", "-p", processor_command)
    assert result.exit_code == 0, result.output
    assert 'Result: ["C", "F", "G"]' in result.output


@pytest.mark.integration
def test_process_surfaces_external_error(processor_command: str) -> None:
    result = _invoke("process", "C-B", "-p", processor_command)
    assert result.exit_code == 1
    assert "ERROR: invalid voicing" in result.output


@pytest.mark.integration
def test_process_reports_parse_error_before_running(processor_command: str) -> None:
    result = _invoke("process", "C-", "-p", processor_command)
    assert result.exit_code == 1
    assert "expected a note after '-'" in result.output
    assert "Result:" not in result.output


@pytest.mark.integration
def test_process_uses_environment_processor(processor_command: str) -> None:
    result = _invoke("process", "E", env={"CHORDPROG_PROCESSOR": processor_command})
    assert result.exit_code == 0, result.output
    assert 'Result: ["E"]' in result.output


def test_check_rejects_undecodable_bytes_per_line(tmp_path) -> None:
    source = tmp_path / "progressions.txt"
    source.write_bytes(b"C-F\n\xff-G\nA-D\n")
    result = _invoke("check", str(source))
    assert result.exit_code == 1
    assert "1: ok     C-F" in result.output
    assert "2: error  unexpected character '\ufffd' at position 0" in result.output
    assert "3: ok     A-D" in result.output


@pytest.mark.integration
def test_process_reports_non_utf8_reply(binary_reply_command: str) -> None:
    result = _invoke("process", "C", "-p", binary_reply_command)
    assert result.exit_code == 1
    assert "ERROR: Processor returned non-UTF-8 output" in result.output
