"""chordprog CLI entry point."""

import json
import logging
import sys
from typing import TextIO

import click

from chordprog import __version__
from chordprog.errors import ParseError
from chordprog.normalizer import ASTNormalizer
from chordprog.parser import DEFAULT_MAX_LENGTH, ParserConfig, ProgressionParser
from chordprog.pipeline import ProgressionPipeline
from chordprog.processors import CommandProcessor
from chordprog.serialization import to_json

EMPTY_INPUT_MESSAGE = "Please enter a chord progression"


def _report_parse_error(exc: ParseError, text: str) -> None:
    click.echo(f"ERROR: {exc.describe(text)}", err=True)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordprog")
@click.option("--verbose", "-v", is_flag=True, help="Log parser and processor activity to stderr.")
@click.option(
    "--max-length",
    type=click.IntRange(1),
    default=DEFAULT_MAX_LENGTH,
    show_default=True,
    envvar="CHORDPROG_MAX_LENGTH",
    metavar="CHARS",
    help="Reject progressions longer than this many characters.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, max_length: int) -> None:
    """chordprog: parse hyphen-separated chord progressions such as C-F-G-C."""
    _configure_logging(verbose)
    ctx.obj = ParserConfig(max_length=max_length)


# ── parse subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("progression")
@click.option("--compact", is_flag=True, help="Print the AST on a single line.")
@click.pass_obj
def parse(config: ParserConfig, progression: str, compact: bool) -> None:
    """
    Parse PROGRESSION and print its AST as JSON.

    \b
    Examples:
      chordprog parse C-F-G-C
      chordprog parse "A-D-E" --compact
    """
    if not progression.strip():
        click.echo(f"ERROR: {EMPTY_INPUT_MESSAGE}", err=True)
        sys.exit(1)

    result = ProgressionParser(config).parse(progression)
    if result.error is not None:
        _report_parse_error(result.error, progression)
        sys.exit(1)

    ast = ASTNormalizer().normalize(result.unwrap())
    click.echo(to_json(ast, indent=None if compact else 2))


# ── process subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.argument("progression")
@click.option(
    "--processor",
    "-p",
    "command",
    required=True,
    envvar="CHORDPROG_PROCESSOR",
    metavar="COMMAND",
    help="External command that reads the AST JSON on stdin and prints a JSON reply.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=CommandProcessor.DEFAULT_TIMEOUT,
    show_default=True,
    envvar="CHORDPROG_TIMEOUT",
    metavar="SECS",
    help="Seconds to wait for the processor's reply.",
)
@click.pass_obj
def process(config: ParserConfig, progression: str, command: str, timeout: float) -> None:
    """
    Parse PROGRESSION and hand its AST to an external processor.

    \b
    Examples:
      chordprog process C-F-G-C -p chord-processor
      CHORDPROG_PROCESSOR="python -m my_processor" chordprog process A-D-E
    """
    if not progression.strip():
        click.echo(f"ERROR: {EMPTY_INPUT_MESSAGE}", err=True)
        sys.exit(1)

    try:
        processor = CommandProcessor(command, timeout=timeout).load()
    except (FileNotFoundError, ValueError) as exc:
        click.echo(f"ERROR: {exc}", err=True)
        sys.exit(1)

    with processor:
        outcome = ProgressionPipeline(processor, config).run(progression)

    if isinstance(outcome.error, ParseError):
        _report_parse_error(outcome.error, progression)
        sys.exit(1)
    if outcome.error is not None:
        click.echo(f"ERROR: {outcome.error}", err=True)
        sys.exit(1)

    click.echo(f"Result: {json.dumps(outcome.result)}")


# ── check subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("source", type=click.File("r", errors="replace"), default="-")
@click.pass_obj
def check(config: ParserConfig, source: TextIO) -> None:
    """
    Validate one progression per line of SOURCE (stdin by default).

    Blank lines are skipped. Undecodable bytes become U+FFFD and are rejected
    by the lexer like any other foreign character. Exits with status 1 if any line is rejected.

    \b
    Examples:
      chordprog check progressions.txt
      printf 'C-F-G\\nC--D\\n' | chordprog check
    """
    parser = ProgressionParser(config)
    failures = 0

    for line_no, line in enumerate(source, start=1):
        text = line.rstrip("\r\n")
        if not text.strip():
            continue
        result = parser.parse(text)
        if result.error is None:
            click.echo(f"{line_no}: ok     {text.strip()}")
        else:
            failures += 1
            click.echo(f"{line_no}: error  {result.error}")

    if failures:
        click.echo(f"{failures} progression(s) rejected.", err=True)
        sys.exit(1)
