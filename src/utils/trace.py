"""Tracing module: logs Sudoku solver and generator steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving or generation process."""

    timestamp: float
    step_number: int
    action_type: str  # 'elimination_pass', 'assign', 'backtrack', 'contradiction', 'stuck', etc.
    cell: Optional[str] = None  # e.g. "R3C7"
    value: Optional[int] = None
    candidates: Optional[int] = None  # candidate count of the cell before the step
    pass_number: Optional[int] = None
    changed: Optional[bool] = None
    resolved_cells: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_elimination_pass(self, pass_number: int, changed: bool, resolved_cells: int):
        """Log one row+column+box propagation pass over the whole grid."""
        self._record(
            'elimination_pass',
            pass_number=pass_number,
            changed=changed,
            resolved_cells=resolved_cells,
        )

    def log_contradiction(self, reason: str):
        """Log a grid that failed validation before or during propagation."""
        self._record('contradiction', reason=reason)

    def log_stuck(self, resolved_cells: int):
        """Log a propagation fixed point that left cells unresolved."""
        self._record('stuck', resolved_cells=resolved_cells, reason="Elimination made no progress")

    def log_assign(self, cell: str, value: int, candidates: int, depth: int):
        """Log a tentative digit placed by the backtracking search."""
        self._record('assign', cell=cell, value=value, candidates=candidates, reason=f"depth {depth}")

    def log_backtrack(self, cell: str, reason: str = "No candidate digit leads to a solution"):
        """Log a backtrack event."""
        self._record('backtrack', cell=cell, reason=reason)

    def log_solution_found(self, resolved_cells: int):
        """Log when a solution is found."""
        self._record('solution_found', resolved_cells=resolved_cells)

    def log_cell_removed(self, cell: str, value: Optional[int], removable: int):
        """Log a given removed by the generator."""
        self._record(
            'cell_removed',
            cell=cell,
            value=value,
            reason=f"{removable} removable candidates",
        )

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'cell', 'value', 'candidates',
            'pass_number', 'changed', 'resolved_cells', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_passes': action_counts.get('elimination_pass', 0),
            'num_assignments': action_counts.get('assign', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_removals': action_counts.get('cell_removed', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
