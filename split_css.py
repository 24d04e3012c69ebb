"""CLI for splitting stylesheets into critical and non-critical CSS files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

from criticalcss import CriticalCss, CSSSyntaxError, OutputFormat

CRITICAL_SUFFIX = "-critical"
NON_CRITICAL_SUFFIX = "-non-critical"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Split stylesheets into <name>-critical.css and <name>-non-critical.css, "
            "using /* !critical */ comments inside rule blocks as markers."
        )
    )
    parser.add_argument("input", help="Path to a .css file or a directory of .css files.")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory where the split files should be written (defaults to the source file's directory).",
    )
    parser.add_argument(
        "--format",
        choices=[output_format.value for output_format in OutputFormat],
        default=OutputFormat.COMPACT.value,
        help="Output formatting (default: compact).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log lexer, parser and splitter progress to stderr.",
    )
    return parser.parse_args(argv)


def is_split_output(path: Path) -> bool:
    return path.stem.endswith(CRITICAL_SUFFIX)


def collect_inputs(path: Path) -> list[Path]:
    if path.is_dir():
        files = sorted(p for p in path.glob("*.css") if p.is_file() and not is_split_output(p))
        if not files:
            raise FileNotFoundError(f"No .css files found in directory: {path}")
        return files
    if path.is_file():
        return [path]
    raise FileNotFoundError(f"Input path does not exist: {path}")


def output_paths(source: Path, output_dir: Path | None) -> tuple[Path, Path]:
    directory = output_dir if output_dir is not None else source.parent
    suffix = source.suffix or ".css"
    return (
        directory / f"{source.stem}{CRITICAL_SUFFIX}{suffix}",
        directory / f"{source.stem}{NON_CRITICAL_SUFFIX}{suffix}",
    )


def generate(files: Iterable[Path], output_dir: Path | None, format: str, verbose: bool = False) -> None:
    logger_config = {"enable_logger": verbose, "log_level": logging.DEBUG if verbose else logging.INFO}
    config = {"lexer_config": logger_config, "parser_config": logger_config, "splitter_config": logger_config}
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
    for source in files:
        try:
            compiled = CriticalCss.from_path(source, config=config).compiled(format)
        except CSSSyntaxError as exc:
            raise CSSSyntaxError(f"Failed to parse {source}: {exc.message}", exc.line, exc.column) from exc
        critical_path, non_critical_path = output_paths(source, output_dir)
        for destination, text in ((critical_path, compiled["critical"]), (non_critical_path, compiled["non_critical"])):
            destination.write_text(text, encoding="utf-8")
            try:
                display_path = destination.relative_to(Path.cwd())
            except ValueError:
                display_path = destination
            print(f"Wrote {display_path}")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    output_dir = Path(args.output_dir) if args.output_dir else None
    try:
        files = collect_inputs(Path(args.input))
        generate(files, output_dir, format=args.format, verbose=args.verbose)
    except (CSSSyntaxError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
