# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Test the digest encoders in safepwdgen.encoding."""

from __future__ import annotations

import base64
import hashlib

import hypothesis
import pytest
from hypothesis import strategies

import tests
from safepwdgen import _types, encoding


class TestGetEncoder:
    """Test encoder selection."""

    @pytest.mark.parametrize(
        ['scheme', 'encoder_class'],
        [
            (_types.EncodingScheme.BASE64, encoding.ByteBlockEncoder),
            (_types.EncodingScheme.BASE71, encoding.RadixEncoder),
            ('base64', encoding.ByteBlockEncoder),
            ('base71', encoding.RadixEncoder),
        ],
    )
    def test_100_selection_by_scheme(
        self,
        scheme: _types.EncodingScheme | str,
        encoder_class: type[encoding.Encoder],
    ) -> None:
        """Schemes and scheme names select the matching encoder."""
        encoder = encoding.get_encoder(scheme)
        assert isinstance(encoder, encoder_class)
        assert encoder.scheme == scheme

    @pytest.mark.parametrize(
        ['flag', 'scheme'],
        [
            (True, _types.EncodingScheme.BASE71),
            (False, _types.EncodingScheme.BASE64),
        ],
    )
    def test_101_selection_by_special_chars_flag(
        self, flag: bool, scheme: _types.EncodingScheme
    ) -> None:
        """The "special characters" flag selects the scheme."""
        assert _types.EncodingScheme.for_special_chars(flag) == scheme

    def test_102_unknown_scheme(self) -> None:
        """Unknown schemes are rejected."""
        with pytest.raises(ValueError, match='base58'):
            encoding.get_encoder('base58')


class TestByteBlockEncoder:
    """Test the base64 encoder."""

    def test_100_empty_digest(self) -> None:
        """The SHA-256 digest of the empty string has a known encoding."""
        digest = hashlib.sha256(b'').digest()
        assert encoding.ByteBlockEncoder().encode(digest) == (
            tests.EMPTY_DIGEST_B64
        )

    @hypothesis.given(digest=strategies.binary(min_size=32, max_size=32))
    def test_200_full_digest(self, digest: bytes) -> None:
        """Every 32-byte digest encodes to 44 symbols, one of them padding."""
        encoded = encoding.ByteBlockEncoder().encode(digest)
        assert len(encoded) == 44
        assert encoded.endswith('=')
        assert not encoded[:-1].endswith('=')
        assert set(encoded) <= set(tests.BASE64_SYMBOLS)
        assert base64.standard_b64decode(encoded) == digest

    @pytest.mark.parametrize(
        ['digest_size', 'max_length'],
        [(0, 0), (1, 4), (3, 4), (4, 8), (20, 28), (32, 44), (64, 88)],
    )
    def test_201_max_length(self, digest_size: int, max_length: int) -> None:
        """The maximum length is that of the padded encoding."""
        encoder = encoding.ByteBlockEncoder()
        assert encoder.max_length(digest_size) == max_length
        assert len(encoder.encode(b'\xff' * digest_size)) == max_length


class TestRadixEncoder:
    """Test the base 71 encoder."""

    def test_100_alphabet(self) -> None:
        """The alphabet has 71 distinct symbols, in the documented order."""
        alphabet = encoding.RadixEncoder().alphabet
        assert alphabet.radix == 71
        assert alphabet.symbols == tests.BASE71_SYMBOLS
        assert len(set(alphabet.symbols)) == 71

    def test_101_zero_digest(self) -> None:
        """An all-zero digest encodes to the single zero symbol."""
        assert encoding.RadixEncoder().encode(bytes(32)) == '!'

    @pytest.mark.parametrize(
        ['data', 'expected'],
        [
            (b'\x00', '!'),
            (b'\x01', '-'),
            (b'\x08', '*'),
            (b'\x09', '0'),
            (b'\x46', 'z'),
            (b'\x47', '-!'),
        ],
    )
    def test_102_small_numbers(self, data: bytes, expected: str) -> None:
        """Small numbers map onto the expected digits."""
        assert encoding.RadixEncoder().encode(data) == expected

    @hypothesis.given(digest=strategies.binary(min_size=32, max_size=32))
    def test_200_round_trip(self, digest: bytes) -> None:
        """Decoding the encoding yields the digest, as a number."""
        encoder = encoding.RadixEncoder()
        encoded = encoder.encode(digest)
        assert encoder.decode(encoded) == int.from_bytes(digest, 'big')
        assert encoded == tests.radix_encode_reference(
            digest, tests.BASE71_SYMBOLS
        )
        assert 1 <= len(encoded) <= 42
        assert set(encoded) <= set(tests.BASE71_SYMBOLS)

    def test_201_max_length(self) -> None:
        """The largest 32-byte digest needs exactly 42 symbols."""
        encoder = encoding.RadixEncoder()
        assert encoder.max_length(32) == 42
        assert len(encoder.encode(b'\xff' * 32)) == 42
