# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Arbitrary-radix encoding of non-negative integers.

Write a (big) non-negative integer as a string of digits in base N,
where the N digits are the symbols of an [`Alphabet`][_types.Alphabet].
This is the positional number system you learned in school, only with
a different set of digit glyphs: the most significant digit comes
first, and no leading zero digits are added, except that the number
zero itself is written as a single zero digit.

Unlike base64 and friends, no assumptions are made about the radix
being a power of two, so the input is not chopped into bit groups.
Instead, the whole input is interpreted as a single number, which is
then repeatedly divided by the radix.

The main API is the [`BaseX`][] class.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from safepwdgen import _types

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ('BaseX',)
__author__ = 'Marco Ricci <software@the13thletter.info>'


class BaseX:
    """Encode and decode non-negative integers in base N.

    Examples:
        >>> decimal = BaseX(_types.Alphabet('decimal', '0123456789'))
        >>> decimal.encode(1497)
        '1497'
        >>> decimal.encode(0)
        '0'
        >>> decimal.decode('001497')
        1497
        >>> hexadecimal = BaseX(
        ...     _types.Alphabet('hexadecimal', '0123456789abcdef')
        ... )
        >>> hexadecimal.encode(b'\\x01\\xff')
        '1ff'

    """

    def __init__(self, alphabet: _types.Alphabet, /) -> None:
        """Initialize the encoder.

        Args:
            alphabet:
                The symbols to use as digits, in digit order.

        Raises:
            ValueError:
                The alphabet is unsuitable; see
                [`_types.Alphabet.validate`][].

        """
        alphabet.validate()
        self.alphabet = alphabet
        self._digit_values = {c: i for i, c in enumerate(alphabet.symbols)}

    @property
    def radix(self) -> int:
        """The number base."""
        return self.alphabet.radix

    def digits(self, number: int, /) -> list[int]:
        """Return the base-N digits of `number`, most significant first.

        Args:
            number: A non-negative integer.

        Returns:
            The list of digit values.  Zero yields `[0]`.

        Raises:
            TypeError: `number` is not an integer.
            ValueError: `number` is negative.

        """
        # bool is a subclass of int.
        if not isinstance(number, int) or isinstance(number, bool):
            msg = f'not an integer: {number!r}'
            raise TypeError(msg)
        if number < 0:
            msg = f'cannot encode negative number: {number!r}'
            raise ValueError(msg)
        if number == 0:
            return [0]
        result: list[int] = []
        while number:
            number, remainder = divmod(number, self.radix)
            result.append(remainder)
        result.reverse()
        return result

    @staticmethod
    def _big_endian_number(digits: Sequence[int], /, *, base: int) -> int:
        """Evaluate the given integer sequence as a big endian number.

        Args:
            digits: A sequence of integers to evaluate.
            base: The number base to evaluate those integers in.

        Returns:
            The number value of the integer sequence.

        Raises:
            ValueError: `base` is an invalid base.
            ValueError: Not all integers are valid base `base` digits.

        Examples:
            >>> BaseX._big_endian_number([1, 2, 3, 4], base=10)
            1234
            >>> BaseX._big_endian_number([0, 0, 1, 4, 9, 7], base=10)
            1497
            >>> BaseX._big_endian_number([1, 0, 0, 1, 0, 0, 0, 0], base=2)
            144
            >>> BaseX._big_endian_number([], base=71)
            0

        """
        if base < 2:  # noqa: PLR2004
            msg = f'invalid base: {base!r}'
            raise ValueError(msg)
        ret = 0
        allowed_range = range(base)
        for x in digits:
            if x not in allowed_range:
                msg = f'invalid base {base!r} digit: {x!r}'
                raise ValueError(msg)
            ret = ret * base + x
        return ret

    def encode(self, data: int | bytes | bytearray, /) -> str:
        """Encode a number, or a byte string read as a number.

        Args:
            data:
                A non-negative integer, or a byte string.  Byte strings
                are read as unsigned big-endian numbers (base 256); the
                empty byte string is the number zero.

        Returns:
            The base-N representation, most significant digit first.
            Never empty.

        Raises:
            TypeError: `data` is neither an integer nor a byte string.
            ValueError: `data` is a negative integer.

        """
        if isinstance(data, (bytes, bytearray)):
            number = int.from_bytes(data, 'big')
        else:
            number = data
        symbols = self.alphabet.symbols
        return ''.join(symbols[d] for d in self.digits(number))

    def decode(self, text: str, /) -> int:
        """Decode a base-N representation back into a number.

        Leading zero digits are permitted and ignored.

        Args:
            text: The base-N representation.

        Returns:
            The number.  The empty string decodes to zero.

        Raises:
            ValueError: `text` contains symbols outside the alphabet.

        """
        try:
            digits = [self._digit_values[c] for c in text]
        except KeyError as exc:
            msg = (
                f'invalid symbol for alphabet {self.alphabet.name!r}: '
                f'{exc.args[0]!r}'
            )
            raise ValueError(msg) from None
        return self._big_endian_number(digits, base=self.radix)
