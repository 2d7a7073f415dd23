"""Configuration and result types for the text-level cipher API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .utils import bytes_to_hex, bytes_to_text


@dataclass
class CipherConfig:
    """Configuration object for an encrypt/decrypt request.

    Drives block dispatch and the optional round trace.
    """

    # Worker threads for block processing (1 = sequential)
    workers: int = 1

    # Record a step-by-step trace of one block
    track_rounds: bool = False

    # Index of the block to trace when track_rounds is set
    trace_block: int = 0

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.trace_block < 0:
            raise ValueError(f"trace_block must be >= 0, got {self.trace_block}")


@dataclass
class CipherResult:
    """Outcome of an encrypt/decrypt request.

    Errors are carried as values: ok is False and error_kind/error_detail
    describe what was rejected.
    """

    output: bytes = b""
    ok: bool = True
    error_kind: str = ""
    error_detail: str = ""

    # Instrumentation (filled only when requested)
    round_keys_hex: list[str] = field(default_factory=list)
    key_expansion: list[dict[str, Any]] = field(default_factory=list)
    trace: list[dict[str, Any]] = field(default_factory=list)

    # Notes and warnings
    notes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def output_hex(self) -> str:
        """Output as lowercase hex."""
        return bytes_to_hex(self.output)

    @property
    def output_text(self) -> str:
        """Output decoded as UTF-8 (invalid sequences replaced)."""
        return bytes_to_text(self.output)

    @property
    def blocks(self) -> int:
        return len(self.output) // 16

    def add_note(self, note: str) -> None:
        """Add an informational note."""
        self.notes.append(note)

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "output_hex": self.output_hex,
            "ok": self.ok,
            "error_kind": self.error_kind,
            "error_detail": self.error_detail,
            "round_keys_hex": self.round_keys_hex,
            "key_expansion": self.key_expansion,
            "trace": self.trace,
            "notes": self.notes,
            "warnings": self.warnings,
        }
