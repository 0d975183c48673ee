"""Command line interface for converting plain-text ER diagrams to Graphviz DOT."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .config import GeneratorDefaults, load_config
from .context import ParseContext
from .errors import ErdplainError, ModelParseError
from .messages import load_messages
from .parser import parse_text
from .render_dot import render_dot
from .styles import Notation, RankDirection

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class CliOptions:
    input_path: Optional[Path]
    output_path: Optional[Path]
    settings: GeneratorDefaults
    messages_path: Optional[Path]
    debug: bool = False


def parse_args(argv: Optional[Sequence[str]] = None) -> CliOptions:
    parser = argparse.ArgumentParser(prog="erdplain", description=__doc__)
    parser.add_argument(
        "-i",
        "--input",
        default="-",
        help="Path to the ER diagram text file. Use '-' (default) for stdin.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="-",
        help="Output path. Use '-' (default) for stdout.",
    )
    parser.add_argument(
        "-n",
        "--notation",
        choices=[notation.value for notation in Notation if notation is not Notation.DEFAULT],
        help="ER notation of the generated diagram (default: ie).",
    )
    parser.add_argument("-f", "--font", help="Font name used for every label.")
    parser.add_argument("-c", "--color", help="Default color pair of entities (default: white).")
    parser.add_argument(
        "--rankdir",
        choices=[direction.value for direction in RankDirection],
        help="Layout direction of the graph (default: LR).",
    )
    parser.add_argument("--config", help="YAML file with generator defaults.")
    parser.add_argument("--messages", help="YAML message catalog used for error reports.")
    parser.add_argument("-d", "--debug", action="store_true", help="Log debug output to stderr.")

    args = parser.parse_args(argv)

    input_path = None if args.input == "-" else Path(args.input)
    if input_path is not None and not input_path.exists():
        raise ErdplainError(f"Input file not found: {input_path}")
    output_path = None if args.output == "-" else Path(args.output)

    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.exists():
        raise ErdplainError(f"Config file not found: {config_path}")
    settings = load_config(config_path).override(
        notation=args.notation,
        color=args.color,
        font=args.font,
        rankdir=args.rankdir,
    )

    return CliOptions(
        input_path=input_path,
        output_path=output_path,
        settings=settings,
        messages_path=Path(args.messages) if args.messages else None,
        debug=args.debug,
    )


def configure_logging(debug: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("erdplain")
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)


def read_input(input_path: Optional[Path]) -> str:
    if input_path is None:
        return sys.stdin.read()
    try:
        return input_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ErdplainError(f"Cannot read input file {input_path}: {exc}") from exc


def run(options: CliOptions) -> str:
    context = ParseContext(messages=load_messages(options.messages_path))
    model = parse_text(read_input(options.input_path), context)
    settings = options.settings
    return render_dot(
        model,
        notation=settings.notation,
        font_name=settings.font_name,
        color_pair=settings.color_pair,
        rank_direction=settings.rank_direction,
    )


def write_output(serialized: str, output_path: Optional[Path]) -> None:
    if output_path is None:
        sys.stdout.write(serialized)
        if not serialized.endswith("\n"):
            sys.stdout.write("\n")
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialized, encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        options = parse_args(argv)
        configure_logging(options.debug)
        serialized = run(options)
        write_output(serialized, options.output_path)
        return 0
    except ModelParseError as exc:
        for error in exc.errors:
            print(str(error), file=sys.stderr)
        return 1
    except ErdplainError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
