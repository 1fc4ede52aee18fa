# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Test basex.BaseX."""

from __future__ import annotations

import functools
import string
from typing import NamedTuple

import hypothesis
import pytest
from hypothesis import strategies

from safepwdgen import _types, basex

DECIMAL = _types.Alphabet('decimal', string.digits)
BINARY = _types.Alphabet('binary', '01')


class TestStaticFunctionality:
    """Test the static functionality of the `BaseX` class."""

    class BigEndianNumberTest(NamedTuple):
        """Test data for
        [`TestStaticFunctionality.test_200_big_endian_number`][].

        Attributes:
            sequence: A sequence of integers.
            base: The numeric base.
            expected: The expected result.

        """

        sequence: list[int]
        """"""
        base: int
        """"""
        expected: int
        """"""

        @strategies.composite
        @staticmethod
        def strategy(
            draw: strategies.DrawFn,
            *,
            base: int | None = None,
        ) -> TestStaticFunctionality.BigEndianNumberTest:
            """Return a sample BigEndianNumberTest.

            Args:
                draw:
                    The `draw` function, as provided for by hypothesis.
                base:
                    The numeric base.  If not given, draw one between
                    2 and 256.

            """
            if base is None:
                base = draw(strategies.integers(min_value=2, max_value=256))
            sequence = draw(
                strategies.lists(
                    strategies.integers(min_value=0, max_value=(base - 1)),
                    max_size=64,
                ),
            )
            value = functools.reduce(lambda x, y: x * base + y, sequence, 0)
            return TestStaticFunctionality.BigEndianNumberTest(
                sequence, base, value
            )

    @hypothesis.given(test_case=BigEndianNumberTest.strategy())
    @hypothesis.example(
        BigEndianNumberTest([1, 2, 3, 4, 5, 6], 10, 123456)
    ).via('manual decimal example')
    @hypothesis.example(BigEndianNumberTest([0, 0, 1, 4, 9, 7], 10, 1497)).via(
        'manual example with leading zeroes'
    )
    @hypothesis.example(BigEndianNumberTest([1, 70], 71, 141)).via(
        'manual base 71 example'
    )
    def test_200_big_endian_number(
        self, test_case: BigEndianNumberTest
    ) -> None:
        """Conversion to big endian numbers in any base works."""
        sequence, base, expected = test_case
        assert basex.BaseX._big_endian_number(sequence, base=base) == expected

    @pytest.mark.parametrize(
        ['exc_type', 'exc_pattern', 'sequence', 'base'],
        [
            (ValueError, 'invalid base 3 digit:', [-1], 3),
            (ValueError, 'invalid base 3 digit:', [3], 3),
            (ValueError, 'invalid base:', [0], 1),
        ],
    )
    def test_300_big_endian_number_exceptions(
        self,
        exc_type: type[Exception],
        exc_pattern: str,
        sequence: list[int],
        base: int,
    ) -> None:
        """Nonsensical conversion of numbers in a given base raises."""
        with pytest.raises(exc_type, match=exc_pattern):
            basex.BaseX._big_endian_number(sequence, base=base)


class TestBaseX:
    """Test the `BaseX` class."""

    @pytest.mark.parametrize(
        ['alphabet', 'exc_pattern'],
        [
            (_types.Alphabet('empty', ''), 'needs at least 2 symbols'),
            (_types.Alphabet('unary', '1'), 'needs at least 2 symbols'),
            (_types.Alphabet('twice', 'abca'), 'duplicate symbols'),
        ],
    )
    def test_100_bad_alphabets(
        self, alphabet: _types.Alphabet, exc_pattern: str
    ) -> None:
        """Unsuitable alphabets are rejected."""
        with pytest.raises(ValueError, match=exc_pattern):
            basex.BaseX(alphabet)

    @pytest.mark.parametrize(
        ['number', 'expected'],
        [
            (0, '0'),
            (7, '7'),
            (10, '10'),
            (1497, '1497'),
            (10**30, '1' + '0' * 30),
        ],
    )
    def test_200_decimal_encoding(self, number: int, expected: str) -> None:
        """Encoding in base 10 agrees with Python's own formatting."""
        assert basex.BaseX(DECIMAL).encode(number) == expected

    @pytest.mark.parametrize(
        ['data', 'expected'],
        [
            (b'', '0'),
            (b'\x00', '0'),
            (b'\x00\x00\x05', '101'),
            (b'\x90', '10010000'),
        ],
    )
    def test_201_byte_string_encoding(
        self, data: bytes, expected: str
    ) -> None:
        """Byte strings are read as unsigned big-endian numbers."""
        assert basex.BaseX(BINARY).encode(data) == expected

    @hypothesis.given(
        number=strategies.integers(min_value=0, max_value=2**512),
    )
    def test_202_digits_agree_with_builtin_formatting(
        self, number: int
    ) -> None:
        """Digits in bases 2, 10 and 16 agree with Python's formatting."""
        hexadecimal = _types.Alphabet('hexadecimal', '0123456789abcdef')
        assert basex.BaseX(BINARY).encode(number) == f'{number:b}'
        assert basex.BaseX(DECIMAL).encode(number) == f'{number:d}'
        assert basex.BaseX(hexadecimal).encode(number) == f'{number:x}'

    @hypothesis.given(
        number=strategies.integers(min_value=0, max_value=2**512),
    )
    def test_203_round_trip(self, number: int) -> None:
        """Decoding an encoding yields the original number."""
        codec = basex.BaseX(_types.BASE71)
        encoded = codec.encode(number)
        assert codec.decode(encoded) == number
        assert encoded == '!' or not encoded.startswith('!')

    def test_204_leading_zero_digits_on_decode(self) -> None:
        """Leading zero digits do not change the decoded number."""
        codec = basex.BaseX(_types.BASE71)
        assert codec.decode('!!!z') == codec.decode('z') == 70
        assert codec.decode('') == 0

    @pytest.mark.parametrize(
        ['number', 'exc_type', 'exc_pattern'],
        [
            (-1, ValueError, 'cannot encode negative number'),
            (1.5, TypeError, 'not an integer'),
            (True, TypeError, 'not an integer'),
            ('12', TypeError, 'not an integer'),
        ],
    )
    def test_300_bad_numbers(
        self,
        number: object,
        exc_type: type[Exception],
        exc_pattern: str,
    ) -> None:
        """Negative numbers and non-numbers cannot be encoded."""
        with pytest.raises(exc_type, match=exc_pattern):
            basex.BaseX(DECIMAL).encode(number)  # type: ignore[arg-type]

    def test_301_foreign_symbols_on_decode(self) -> None:
        """Symbols outside the alphabet cannot be decoded."""
        with pytest.raises(ValueError, match='invalid symbol for alphabet'):
            basex.BaseX(DECIMAL).decode('12a4')
