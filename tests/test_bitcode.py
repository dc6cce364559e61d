"""Tests for bitcode u32 packing."""

import pytest

from primitives.bitcode import TAG_U8, TAG_U16, TAG_U32, encode_u32, encoded_len


class TestEncodeU32:

    @pytest.mark.parametrize("value,expected", [
        (0, "0400"),
        (1, "0401"),
        (255, "04ff"),
        (256, "020001"),
        (300, "022c01"),
        (65535, "02ffff"),
        (65536, "0000000100"),
        (70000, "0070110100"),
        (0xFFFFFFFF, "00ffffffff"),
    ])
    def test_vectors(self, value: int, expected: str) -> None:
        assert encode_u32(value).hex() == expected

    def test_tag_selected_by_magnitude(self) -> None:
        assert encode_u32(255)[0] == TAG_U8
        assert encode_u32(256)[0] == TAG_U16
        assert encode_u32(65536)[0] == TAG_U32

    def test_monty_one(self) -> None:
        """Montgomery form of 1 (268435454) takes the 4-byte packing."""
        assert encode_u32(268435454) == bytes([0x00, 0xFE, 0xFF, 0xFF, 0x0F])

    @pytest.mark.parametrize("bad", [-1, 2**32])
    def test_out_of_range(self, bad: int) -> None:
        with pytest.raises(ValueError):
            encode_u32(bad)


class TestEncodedLen:

    @pytest.mark.parametrize("value", [0, 255, 256, 65535, 65536, 2**31])
    def test_matches_encoding(self, value: int) -> None:
        assert encoded_len(value) == len(encode_u32(value))
