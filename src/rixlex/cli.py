"""Command-line interface for rixlex."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rixlex.errors import Diagnostic
from rixlex.tokens import Token

_FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    format: str
    spans: bool
    strict: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="rixlex",
        description="Tokenize a rix source file",
    )
    p.add_argument("input", help="Input file, or - for stdin")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=_FORMATS,
        default=None,
        help="Token output format (default: text)",
    )
    p.add_argument(
        "--no-spans",
        dest="spans",
        action="store_false",
        default=None,
        help="Omit source spans from text output",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover rixlex.toml)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with status 1 if any lexical error is reported",
    )
    p.add_argument("--debug", action="store_true", help="Dump nested token tree to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "rixlex.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}
    cfg_lexer = config.get("lexer")
    if not isinstance(cfg_lexer, dict):
        cfg_lexer = {}

    # Output format: config < CLI
    fmt = "text"
    cfg_format = cfg_output.get("format")
    if cfg_format is not None:
        if cfg_format not in _FORMATS:
            raise argparse.ArgumentTypeError(f"invalid output format in config: {cfg_format}")
        fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    spans = True
    cfg_spans = cfg_output.get("spans")
    if isinstance(cfg_spans, bool):
        spans = cfg_spans
    if args.spans is not None:
        spans = args.spans

    strict = False
    cfg_strict = cfg_lexer.get("strict")
    if isinstance(cfg_strict, bool):
        strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        spans=spans,
        strict=strict,
        debug=args.debug,
    )


def lex_file(options: CliOptions) -> tuple[str, list[Token], list[Diagnostic]]:
    """Read and lex the input, returning (source, tokens, diagnostics)."""
    from rixlex.debug import dump_tokens
    from rixlex.lexer import Lexer

    if options.input_file is None:
        source = sys.stdin.read()
        filename = "<stdin>"
    else:
        source = options.input_file.read_text(encoding="utf-8")
        filename = str(options.input_file)

    lexer = Lexer(source, filename)
    tokens = list(lexer)

    if options.debug:
        dump_tokens(tokens)

    return source, tokens, lexer.diagnostics


def render_tokens(tokens: list[Token], fmt: str, spans: bool = True) -> str:
    """Render tokens as one-per-line text or as a JSON array."""
    if fmt == "json":
        items = [
            {
                "kind": t.kind.name,
                "value": t.value,
                "span": {
                    "start": {"line": t.span.start.line, "column": t.span.start.column},
                    "end": {"line": t.span.end.line, "column": t.span.end.column},
                },
            }
            for t in tokens
        ]
        return json.dumps(items, indent=2) + "\n"

    lines = []
    for t in tokens:
        text = f"{t.kind.name} {t.value!r}"
        lines.append(f"{t.span} {text}" if spans else text)
    return "".join(line + "\n" for line in lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        source, tokens, diagnostics = lex_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    for diag in diagnostics:
        print(diag.format(source), file=sys.stderr)

    output = render_tokens(tokens, options.format, options.spans)
    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    if options.strict and diagnostics:
        return 1
    return 0


def cli() -> None:
    """Console-script wrapper around main()."""
    raise SystemExit(main())
