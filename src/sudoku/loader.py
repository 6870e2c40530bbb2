import json
import numbers
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .model import CELL_COUNT
from .parser import split_puzzles
from src.utils.io import load_json

PUZZLE_KEYS = ("puzzle", "quizzes", "quiz", "grid", "board")
SOLUTION_KEYS = ("solution", "solutions")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .parquet, .csv, .json, .jsonl and plain text
    (one or more puzzles in either layout).
    Returns a list of records with "id", "puzzle" and, when present, "solution".
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = Path(file_path).stem

    def _coerce_text(value: Any) -> Optional[str]:
        if value is None:
            return None
        # Numeric columns lose their leading zeros.
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            return str(int(value)).zfill(CELL_COUNT)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    def _first_of(record: Dict[str, Any], keys) -> Optional[str]:
        lowered = {str(k).lower(): v for k, v in record.items()}
        for key in keys:
            text = _coerce_text(lowered.get(key))
            if text:
                return text
        return None

    def _normalize_record(record: Dict[str, Any], position: int) -> Optional[Dict[str, Any]]:
        puzzle = _first_of(record, PUZZLE_KEYS)
        if not puzzle:
            return None
        normalized: Dict[str, Any] = {
            "id": str(record.get("id") or f"{stem}-{position}"),
            "puzzle": puzzle,
        }
        solution = _first_of(record, SOLUTION_KEYS)
        if solution:
            normalized["solution"] = solution
        return normalized

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        data = []
        for position, record in enumerate(records, start=1):
            if not isinstance(record, dict):
                continue
            normalized = _normalize_record(record, position)
            if normalized:
                data.append(normalized)
        return data

    def _read_jsonl() -> List[Any]:
        records = []
        with open(file_path, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
        return records

    # Case 1: tabular files
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        return _normalize_all(df.to_dict(orient="records"))
    if file_path.endswith(".csv"):
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 2: JSON (array or object), falling back to line-delimited content
    if file_path.endswith(".json"):
        try:
            payload = load_json(Path(file_path))
        except json.JSONDecodeError:
            return _normalize_all(_read_jsonl())
        if isinstance(payload, dict):
            payload = [payload]
        return _normalize_all(payload if isinstance(payload, list) else [])

    if file_path.endswith(".jsonl"):
        return _normalize_all(_read_jsonl())

    # Case 3: puzzle text
    with open(file_path, "r", encoding="utf-8") as f:
        puzzles = split_puzzles(f.read())
    return [
        {"id": f"{stem}-{position}", "puzzle": puzzle}
        for position, puzzle in enumerate(puzzles, start=1)
    ]
