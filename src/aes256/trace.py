"""
Trace recording and pretty printing for AES-256 operations.

Contains:
- TraceRecorder: in-memory step records, JSON Lines file output and
  compact verbose stdout
- print_header / print_result: shared formatting helpers
"""

import json
from typing import Any, TextIO

from .utils import copy_state, format_state_grid, format_state_line, state_to_hex


# ------------------------------------------------------------------
# Formatting helpers
# ------------------------------------------------------------------

def _fmt_state_words(state: list[list[int]]) -> str:
    """Format state as 4 space-separated 32-bit words (column-major)."""
    words = []
    for col in range(4):
        w = ""
        for row in range(4):
            w += f"{state[row][col]:02x}"
        words.append(w)
    return " ".join(words)


def _compute_delta(
    old_state: list[list[int]] | None,
    new_state: list[list[int]],
    max_show: int = 8,
) -> str:
    """Compute byte-wise delta between two states."""
    if old_state is None:
        return "(initial)"

    changes: list[str] = []
    for col in range(4):
        for row in range(4):
            idx = col * 4 + row
            ov = old_state[row][col]
            nv = new_state[row][col]
            if ov != nv:
                changes.append(f"b[{idx:d}]={ov:02x}→{nv:02x}")

    if not changes:
        return "(no change)"
    if len(changes) <= max_show:
        return " ".join(changes)
    return " ".join(changes[:max_show]) + f" +{len(changes) - max_show} more"


# ------------------------------------------------------------------
# TraceRecorder
# ------------------------------------------------------------------

class TraceRecorder:
    """
    Records the state of one block after every transformation.

    Supports:
    - in-memory records   (always; see get_records / to_round_details)
    - JSON Lines output   (when trace_file is set)
    - verbose stdout      (one line per step with a byte delta)

    The recorder is an observer only: block functions call record() with
    copies of their state and never read anything back.
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []
        self._prev_state: list[list[int]] | None = None

    def record(self, **kwargs) -> None:
        """
        Record a trace entry.

        Expected keys are round, step, state and optionally round_key;
        anything else is stored as given.
        """
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            if len(obj) == 4 and all(isinstance(r, list) and len(r) == 4 for r in obj):
                return state_to_hex(obj)
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, bytes):
            return obj.hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        """Compact verbose line: round, step, state words and delta."""
        round_num = record.get("round", "?")
        step = record.get("step", "unknown")

        if "state" in record:
            state = record["state"]
            delta = _compute_delta(self._prev_state, state)
            print(f"R{round_num:>2}  {step:28s} STATE:{_fmt_state_words(state)}  "
                  f"Δ:{delta}")
            self._prev_state = copy_state(state)
        else:
            print(f"R{round_num:>2}  {step}")

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def to_round_details(self) -> list[dict[str, Any]]:
        """
        Records in display form: states and round keys as hex grids.

        This is the shape a visualization layer consumes.
        """
        details = []
        for rec in self._records:
            entry: dict[str, Any] = {
                "round": rec.get("round"),
                "step": rec.get("step"),
            }
            if "state" in rec:
                entry["state"] = format_state_grid(rec["state"])
                entry["state_hex"] = format_state_line(rec["state"])
            if "round_key" in rec:
                entry["round_key"] = format_state_grid(rec["round_key"])
            details.append(entry)
        return details

    def clear(self) -> None:
        self._records.clear()
        self._prev_state = None

    def __len__(self) -> int:
        return len(self._records)


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_result(label: str, output: str, blocks: int) -> None:
    """Print final encryption/decryption result."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"{label}: {output}")
    print(f"Blocks: {blocks}")
    print(f"{'='*70}")
