"""Tests for GF(2^8) arithmetic."""

import pytest

from aes256.galois import (
    gf_multiply,
    times2,
    times3,
    times9,
    times11,
    times13,
    times14,
    xtime,
)


class TestXtime:
    """FIPS-197 section 4.2.1 worked example."""

    def test_xtime_chain(self):
        """{57} doubled repeatedly: ae, 47, 8e, 07."""
        assert xtime(0x57) == 0xae
        assert xtime(0xae) == 0x47
        assert xtime(0x47) == 0x8e
        assert xtime(0x8e) == 0x07

    def test_times2_reduces_on_overflow(self):
        assert times2(0x80) == 0x1b
        assert times2(0x01) == 0x02


class TestGfMultiply:
    """General multiplication."""

    def test_fips197_examples(self):
        """{57} * {83} = {c1} and {57} * {13} = {fe}."""
        assert gf_multiply(0x57, 0x83) == 0xc1
        assert gf_multiply(0x57, 0x13) == 0xfe

    def test_identity_and_zero(self):
        for a in range(256):
            assert gf_multiply(a, 1) == a
            assert gf_multiply(a, 0) == 0

    def test_commutative(self):
        for a in range(0, 256, 7):
            for b in range(0, 256, 11):
                assert gf_multiply(a, b) == gf_multiply(b, a)

    def test_results_in_byte_range(self):
        for a in range(256):
            for b in (2, 3, 9, 11, 13, 14, 0xff):
                assert 0 <= gf_multiply(a, b) <= 0xff


class TestConstantMultipliers:
    """times2/3/9/11/13/14 agree with the general multiply for every byte."""

    @pytest.mark.parametrize("fn,factor", [
        (times2, 2),
        (times3, 3),
        (times9, 9),
        (times11, 11),
        (times13, 13),
        (times14, 14),
    ])
    def test_matches_gf_multiply(self, fn, factor):
        for b in range(256):
            assert fn(b) == gf_multiply(b, factor), f"mismatch at 0x{b:02x}"

    def test_inverse_matrix_row_times_forward_column_is_identity(self):
        """(14, 11, 13, 9) . (2, 1, 1, 3) = 1 and the other products vanish."""
        inv_row = [14, 11, 13, 9]
        forward_cols = [
            [2, 1, 1, 3],
            [3, 2, 1, 1],
            [1, 3, 2, 1],
            [1, 1, 3, 2],
        ]
        results = []
        for col in forward_cols:
            acc = 0
            for a, b in zip(inv_row, col):
                acc ^= gf_multiply(a, b)
            results.append(acc)
        assert results == [1, 0, 0, 0]
