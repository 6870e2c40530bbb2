"""CLI entrypoint: load puzzle(s), solve or generate, and report results."""

import argparse
import csv
import os
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import solve_puzzle
from src.sudoku.generator import generate, generate_puzzle
from src.sudoku.loader import load_puzzles
from src.sudoku.model import Grid
from src.sudoku.parser import parse_puzzle, split_puzzles
from src.sudoku.printer import format_grid, format_numeric
from src.sudoku.validity import needs_solving
from src.utils.io import save_json
from src.utils.trace import Tracer, get_tracer, reset_tracer

PUZZLE_SUFFIXES = [".txt", ".sdk", ".csv", ".parquet", ".json", ".jsonl"]
SOLVE_FIELDS = ["id", "status", "solution", "steps", "passes"]
GENERATE_FIELDS = ["id", "status", "puzzle", "givens"]


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"{name} must be an integer, got {raw!r}")


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Solve or generate 9x9 Sudoku puzzles")
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Puzzle file, directory of puzzle files, or '-' for stdin (default: stdin)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results (.csv or .json)")
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Carve each input grid into a locally minimal puzzle; without input, create new puzzles.",
    )
    parser.add_argument("--count", type=int, default=1, help="Number of puzzles to create when --generate has no input")
    parser.add_argument(
        "--seed",
        type=int,
        default=_env_int("SUDOKU_SEED"),
        help="Random seed for generation (default: $SUDOKU_SEED)",
    )
    parser.add_argument(
        "--no-backtrack",
        action="store_true",
        help="Use elimination only; puzzles it cannot finish are reported as stuck.",
    )
    parser.add_argument("--format", choices=["ascii", "numeric"], default="ascii", help="Printed grid layout")
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=os.environ.get("SUDOKU_TRACE_DIR") or None,
        help="Write one trace CSV per puzzle into this directory (default: $SUDOKU_TRACE_DIR)",
    )
    return parser.parse_args(argv)


def collect_puzzles(source: Optional[str]) -> List[Dict[str, Any]]:
    if source is None or source == "-":
        puzzles = split_puzzles(sys.stdin.read())
        return [{"id": f"stdin-{i}", "puzzle": p} for i, p in enumerate(puzzles, start=1)]

    path = Path(source)
    if path.is_file():
        return load_puzzles(str(path))
    if path.is_dir():
        puzzles: List[Dict[str, Any]] = []
        for file_path in sorted(path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
        return puzzles
    raise ValueError(f"Input path {source} is neither file nor directory")


def render(grid: Grid, layout: str) -> str:
    if layout == "numeric":
        return format_numeric(grid) + "\n"
    return format_grid(grid)


def solve_record(record: Dict[str, Any], args, tracer: Tracer) -> Dict[str, Any]:
    puzzle_id = record["id"]
    grid = parse_puzzle(record["puzzle"])
    result = solve_puzzle(grid, allow_backtracking=not args.no_backtrack, tracer=tracer)
    summary = tracer.summary()

    row: Dict[str, Any] = {
        "id": puzzle_id,
        "status": result.status.value,
        "solution": format_numeric(result.grid) if result else "",
        # Guesses made by the search; zero for puzzles elimination finishes alone.
        "steps": summary["num_assignments"],
        "passes": summary["num_passes"],
    }
    expected = record.get("solution")
    if expected and result:
        row["matches_expected"] = row["solution"] == expected

    if not args.output:
        print(f"{puzzle_id}: {result.status.value}" + (f" ({result.reason})" if result.reason else ""))
        print(render(result.grid, args.format), end="")
        if row.get("matches_expected") is False:
            print(f"{puzzle_id}: solution differs from the expected one")
    return row


def generate_record(record: Optional[Dict[str, Any]], index: int, args, rng: random.Random, tracer: Tracer) -> Dict[str, Any]:
    if record is None:
        puzzle_id = f"generated-{index}"
        grid = generate_puzzle(rng, tracer)
    else:
        puzzle_id = record["id"]
        grid = parse_puzzle(record["puzzle"])
        if needs_solving(grid):
            result = solve_puzzle(grid, allow_backtracking=not args.no_backtrack, tracer=tracer)
            if not result:
                raise ValueError(f"cannot generate from an unsolved grid ({result.status.value}: {result.reason})")
            grid = result.grid
        generate(grid, rng, tracer)

    if not args.output:
        print(f"{puzzle_id}: {grid.resolved_count()} givens")
        print(render(grid, args.format), end="")
    return {
        "id": puzzle_id,
        "status": "generated",
        "puzzle": format_numeric(grid),
        "givens": grid.resolved_count(),
    }


def write_results_csv(results: List[Dict[str, Any]], output_path: Path, fieldnames: List[str]) -> None:
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        for r in results:
            writer.writerow(r)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    rng = random.Random(args.seed)
    results: List[Dict[str, Any]] = []
    errors = 0

    records: List[Optional[Dict[str, Any]]]
    if args.generate and args.input is None:
        records = [None] * max(args.count, 0)
    else:
        records = list(collect_puzzles(args.input))

    for index, record in enumerate(records, start=1):
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = record["id"] if record else f"generated-{index}"

        try:
            if args.generate:
                results.append(generate_record(record, index, args, rng, tracer))
            else:
                results.append(solve_record(record, args, tracer))
        except ValueError as e:
            errors += 1
            print(f"ERROR: Failed to process puzzle {puzzle_id}: {e}")
            results.append({"id": puzzle_id, "status": "error", "steps": -1})

        if args.trace_dir:
            tracer.to_csv(Path(args.trace_dir) / f"{puzzle_id}.csv")

    if args.output:
        if args.output.suffix == ".json":
            save_json(args.output, results)
        else:
            write_results_csv(results, args.output, GENERATE_FIELDS if args.generate else SOLVE_FIELDS)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
