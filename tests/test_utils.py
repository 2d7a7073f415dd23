"""Tests for state layout and hex/text codecs."""

import pytest

from aes256.errors import InvalidBlockLength, InvalidHexInput
from aes256.utils import (
    bytes_to_hex,
    bytes_to_state,
    bytes_to_text,
    copy_state,
    format_state_grid,
    hex_to_bytes,
    state_to_bytes,
    state_to_hex,
    text_to_bytes,
    xor_states,
)


class TestStateLayout:
    """Column-major mapping between 16 bytes and the 4x4 state."""

    def test_column_major(self):
        state = bytes_to_state(bytes(range(16)))
        for i in range(16):
            assert state[i % 4][i // 4] == i

    def test_round_trip(self):
        data = bytes(range(100, 116))
        assert state_to_bytes(bytes_to_state(data)) == data

    @pytest.mark.parametrize("length", [0, 15, 17, 32])
    def test_wrong_length_rejected(self, length):
        with pytest.raises(InvalidBlockLength, match="Expected 16 bytes"):
            bytes_to_state(bytes(length))

    def test_copy_is_independent(self):
        state = bytes_to_state(bytes(range(16)))
        dup = copy_state(state)
        dup[0][0] = 0xff
        assert state[0][0] == 0
        assert dup is not state
        assert all(dup[r] is not state[r] for r in range(4))

    def test_xor_states(self):
        a = bytes_to_state(bytes(range(16)))
        assert state_to_bytes(xor_states(a, a)) == bytes(16)

    def test_format_grid(self):
        grid = format_state_grid(bytes_to_state(bytes(range(16))))
        lines = grid.splitlines()
        assert len(lines) == 4
        assert lines[0].split() == ["00", "04", "08", "0c"]
        assert lines[3].split() == ["03", "07", "0b", "0f"]

    def test_state_to_hex(self):
        assert state_to_hex(bytes_to_state(bytes(range(16)))) == bytes(range(16)).hex()


class TestHex:
    """Hex boundary."""

    def test_lowercase_no_separators(self):
        assert bytes_to_hex(b"\xab\x01\xff") == "ab01ff"

    def test_strips_whitespace_and_separators(self):
        assert hex_to_bytes("6b c1\nbe:e2-2e") == bytes.fromhex("6bc1bee22e")

    def test_uppercase_accepted(self):
        assert hex_to_bytes("ABCDEF") == b"\xab\xcd\xef"

    def test_empty(self):
        assert hex_to_bytes("") == b""

    @pytest.mark.parametrize("text", ["abc", "a", "0g", "12 3"])
    def test_odd_length_rejected(self, text):
        with pytest.raises(InvalidHexInput):
            hex_to_bytes(text)


class TestText:
    """UTF-8 boundary."""

    def test_round_trip(self):
        text = "héllo wörld ✓"
        assert bytes_to_text(text_to_bytes(text)) == text

    def test_invalid_utf8_replaced(self):
        assert bytes_to_text(b"ok\xff") == "ok�"
