"""
Didactic walkthrough of the start of an AES-256 encryption.

Covers the state layout, the first group of key-expansion words, the
initial AddRoundKey (round 0) and every transformation of round 1, with
per-byte tables. Uses the same primitives as the full cipher, so the
printed states are the real intermediate values.
"""

from __future__ import annotations

import json
from typing import Any, TextIO

from tabulate import tabulate

from .galois import times2, times3
from .key_schedule import expand_key_detailed
from .transformations import add_round_key, mix_columns, shift_rows, sub_bytes
from .utils import bytes_to_state, state_to_hex


# ──────────────────────────────────────────────────────────────────
# Formatting helpers
# ──────────────────────────────────────────────────────────────────

def _fmt_matrix_labeled(state: list[list[int]], indent: str = "    ") -> str:
    """Format a 4x4 state with column headers and row labels."""
    lines: list[str] = []
    lines.append(f"{indent}       c0   c1   c2   c3")
    for row in range(4):
        vals = "   ".join(f"{state[row][col]:02x}" for col in range(4))
        lines.append(f"{indent}r{row}  [ {vals} ]")
    return "\n".join(lines)


def _byte_index(row: int, col: int) -> int:
    """Column-major linear index for byte at (row, col)."""
    return col * 4 + row


def _fmt_byte_table(
    rows: list[tuple[Any, ...]],
    headers: list[str],
    indent: str = "    ",
) -> str:
    """Format a list of row-tuples as an aligned table."""
    # Hex cells like "00" or "10" must stay strings
    table = tabulate(rows, headers=headers, tablefmt="simple", disable_numparse=True)
    return "\n".join(indent + line for line in table.splitlines())


def _word_hex(word: list[int] | None) -> str:
    return bytes(word).hex() if word is not None else "-"


def _xor_table(
    before: list[list[int]],
    round_key: list[list[int]],
    after: list[list[int]],
    stage: str,
    key_label: str,
    jl: "_JsonlWriter",
) -> str:
    rows: list[tuple[str, ...]] = []
    for col in range(4):
        for row in range(4):
            idx = _byte_index(row, col)
            sv = before[row][col]
            kv = round_key[row][col]
            rv = after[row][col]
            rows.append((
                f"b{idx:02d}", f"({row},{col})",
                f"{sv:02x}", f"{kv:02x}", f"{rv:02x}",
                f"{sv:02x} ^ {kv:02x} = {rv:02x}",
            ))
            jl.emit(stage=stage, i=idx, r=row, c=col,
                    state=f"{sv:02x}", **{key_label: f"{kv:02x}"}, out=f"{rv:02x}")
    return _fmt_byte_table(rows, ["idx", "(r,c)", "state", key_label, "out", "equation"])


# ──────────────────────────────────────────────────────────────────
# Walkthrough
# ──────────────────────────────────────────────────────────────────

def run_round_walkthrough(
    key: bytes,
    plaintext: bytes,
    verbose: bool = False,
    trace_file: TextIO | None = None,
) -> dict[str, Any]:
    """
    Execute round 0 + round 1 of AES-256 encryption with didactic output.

    Args:
        key: 32-byte AES-256 key
        plaintext: 16-byte block
        verbose: Print the walkthrough to stdout
        trace_file: Optional JSON Lines sink

    Returns a dict with:
        state_in_round1   – 4x4 state entering round 1
        state_out_round1  – 4x4 state after round 1
        round_key_1       – 4x4 round key used by round 1

    Raises:
        InvalidKeyLength: If key is not 32 bytes
        InvalidBlockLength: If plaintext is not 16 bytes
    """
    out = _Printer(verbose)
    jl = _JsonlWriter(trace_file, mode="round")

    expansion = expand_key_detailed(key)
    round_keys = expansion.round_keys
    pt_state = bytes_to_state(plaintext)

    # ── 1. State layout primer ──────────────────────────────────
    out.section("1. AES State Layout")
    out.p("AES operates on a 4x4 byte matrix in COLUMN-MAJOR order.")
    out.p("state[row][col]  with row=0..3, col=0..3")
    out.p("")
    out.p("Linear byte index (column-major):")
    out.p("       col 0  col 1  col 2  col 3")
    out.p("    r0[ b0    b4     b8     b12 ]")
    out.p("    r1[ b1    b5     b9     b13 ]")
    out.p("    r2[ b2    b6     b10    b14 ]")
    out.p("    r3[ b3    b7     b11    b15 ]")

    # ── 2. Inputs ───────────────────────────────────────────────
    out.section("2. Inputs")
    out.p(f"Key (hex):       {key.hex()}")
    out.p(f"Plaintext (hex): {plaintext.hex()}")
    out.p("")
    out.p("RoundKey[0] (first half of the 256-bit key):")
    out.p(_fmt_matrix_labeled(round_keys[0]))
    out.p("")
    out.p("RoundKey[1] (second half of the 256-bit key):")
    out.p(_fmt_matrix_labeled(round_keys[1]))

    jl.emit(stage="inputs", round_key_0=state_to_hex(round_keys[0]),
            round_key_1=state_to_hex(round_keys[1]))

    # ── 3. Key expansion, first generated group ─────────────────
    out.section("3. Key Expansion: words w8..w15")
    out.p("w[i] = temp XOR w[i-8], where temp comes from w[i-1]:")
    out.p("  i % 8 == 0 : SubWord(RotWord(w[i-1])) XOR Rcon[i/8]")
    out.p("  i % 8 == 4 : SubWord(w[i-1])          (AES-256 only)")
    out.p("  otherwise  : w[i-1]")
    out.p("")
    ks_rows: list[tuple[str, ...]] = []
    for step in expansion.steps[:8]:
        ks_rows.append((
            f"w{step.index}", step.operation,
            _word_hex(step.before), _word_hex(step.after_rot),
            _word_hex(step.after_sub),
            f"{step.rcon:02x}" if step.rcon is not None else "-",
            _word_hex(step.xored_with), _word_hex(step.result),
        ))
        jl.emit(stage="key_expansion", **step.to_dict())
    out.p(_fmt_byte_table(ks_rows, ["word", "operation", "w[i-1]", "rot",
                                    "sub", "rcon", "w[i-8]", "w[i]"]))
    out.p("")
    out.p("RoundKey[2] = w8..w11, RoundKey[3] = w12..w15")

    # ── 4. Round 0: initial AddRoundKey ─────────────────────────
    out.section("4. Pre-round: Round 0 AddRoundKey")
    out.p("Plaintext state:")
    out.p(_fmt_matrix_labeled(pt_state))

    state_in = add_round_key(pt_state, round_keys[0])

    out.p("")
    out.p("AddRoundKey: Plaintext XOR RoundKey[0]")
    out.p(_xor_table(pt_state, round_keys[0], state_in, "add_round_key_0", "rk0", jl))
    out.p("")
    out.p("State entering Round 1:")
    out.p(_fmt_matrix_labeled(state_in))

    # ── 5. Round 1 walkthrough ──────────────────────────────────
    out.section("5. Round 1 Walkthrough")

    # 5.1 SubBytes
    out.subsection("5.1  SubBytes")
    out.p("Each byte is replaced by its S-box lookup: out = S[in]")
    after_sb = sub_bytes(state_in)

    sb_rows: list[tuple[str, ...]] = []
    for col in range(4):
        for row in range(4):
            idx = _byte_index(row, col)
            inv = state_in[row][col]
            outv = after_sb[row][col]
            sb_rows.append((f"b{idx:02d}", f"({row},{col})", f"{inv:02x}", f"{outv:02x}"))
            jl.emit(stage="subbytes", i=idx, r=row, c=col,
                    **{"in": f"{inv:02x}", "out": f"{outv:02x}"})
    out.p(_fmt_byte_table(sb_rows, ["idx", "(r,c)", "in", "S[in]"]))
    out.p("")
    out.p("After SubBytes:")
    out.p(_fmt_matrix_labeled(after_sb))

    # 5.2 ShiftRows
    out.subsection("5.2  ShiftRows")
    out.p("Each row is cyclically shifted LEFT by its row index.")
    out.p("")
    for r in range(4):
        before_vals = [f"{after_sb[r][c]:02x}" for c in range(4)]
        after_vals = [f"{after_sb[r][(c + r) % 4]:02x}" for c in range(4)]
        out.p(f"  Row {r} (shift left by {r}): "
              f"[{' '.join(before_vals)}] -> [{' '.join(after_vals)}]")

    after_sr = shift_rows(after_sb)
    jl.emit(stage="shiftrows", state_in=state_to_hex(after_sb),
            state_out=state_to_hex(after_sr))

    out.p("")
    out.p("After ShiftRows:")
    out.p(_fmt_matrix_labeled(after_sr))

    # 5.3 MixColumns
    out.subsection("5.3  MixColumns")
    out.p("Each column is multiplied by the fixed matrix in GF(2^8):")
    out.p("    [02 03 01 01]   [a0]   [r0]")
    out.p("    [01 02 03 01] x [a1] = [r1]")
    out.p("    [01 01 02 03]   [a2]   [r2]")
    out.p("    [03 01 01 02]   [a3]   [r3]")

    after_mc = mix_columns(after_sr)

    for col in range(4):
        a = [after_sr[row][col] for row in range(4)]
        r = [after_mc[row][col] for row in range(4)]
        x2 = [times2(v) for v in a]
        x3 = [times3(v) for v in a]

        out.p("")
        out.p(f"  --- Column {col} ---")
        out.p(f"  Input:  a0={a[0]:02x}  a1={a[1]:02x}  a2={a[2]:02x}  a3={a[3]:02x}")
        out.p(f"  *02:    {x2[0]:02x}      {x2[1]:02x}      {x2[2]:02x}      {x2[3]:02x}")
        out.p(f"  *03:    {x3[0]:02x}      {x3[1]:02x}      {x3[2]:02x}      {x3[3]:02x}")
        for ri in range(4):
            out.p(f"  r{ri} = {r[ri]:02x}")

        jl.emit(stage="mixcolumns", col=col,
                a=[f"{v:02x}" for v in a],
                times2=[f"{v:02x}" for v in x2],
                times3=[f"{v:02x}" for v in x3],
                result=[f"{v:02x}" for v in r])

    out.p("")
    out.p("After MixColumns:")
    out.p(_fmt_matrix_labeled(after_mc))

    # 5.4 AddRoundKey (Round 1)
    out.subsection("5.4  AddRoundKey (Round 1)")
    state_out = add_round_key(after_mc, round_keys[1])
    out.p("state XOR RoundKey[1]:")
    out.p(_xor_table(after_mc, round_keys[1], state_out, "add_round_key_1", "rk1", jl))
    out.p("")
    out.p("State after Round 1:")
    out.p(_fmt_matrix_labeled(state_out))

    # ── 6. Summary ──────────────────────────────────────────────
    out.section("6. Summary")
    in_hex = state_to_hex(state_in)
    out_hex = state_to_hex(state_out)
    out.p(f"State entering Round 1: {in_hex}")
    out.p(f"State after   Round 1: {out_hex}")
    out.p("Rounds 2-13 repeat round 1 with RoundKey[2..13]; round 14 omits MixColumns.")

    jl.emit(stage="summary", state_in=in_hex, state_out=out_hex)

    return {
        "state_in_round1": state_in,
        "state_out_round1": state_out,
        "round_key_1": round_keys[1],
    }


# ──────────────────────────────────────────────────────────────────
# Minimal output abstractions
# ──────────────────────────────────────────────────────────────────

class _Printer:
    """Conditional stdout printer (only when verbose)."""
    def __init__(self, enabled: bool):
        self._on = enabled

    def p(self, text: str = "") -> None:
        if self._on:
            print(text)

    def section(self, title: str) -> None:
        if self._on:
            print(f"\n{'='*70}")
            print(f"  {title}")
            print(f"{'='*70}")

    def subsection(self, title: str) -> None:
        if self._on:
            print(f"\n  --- {title} {'─'*max(0, 55-len(title))}")


class _JsonlWriter:
    """Emit deterministic JSONL events."""

    def __init__(self, fh: TextIO | None, mode: str = "round"):
        self._fh = fh
        self._base: dict[str, Any] = {"mode": mode, "round_index": 1}
        self._seq = 0

    def emit(self, **kw: Any) -> None:
        if self._fh is None:
            return
        record = dict(self._base)
        record["seq"] = self._seq
        self._seq += 1
        record.update(kw)
        self._fh.write(json.dumps(record, default=str) + "\n")
        self._fh.flush()
