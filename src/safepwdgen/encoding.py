# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Rendering digests as printable strings.

There are two ways of turning a digest into a password: the standard
base64 encoding, which works on blocks of bytes and yields six bits per
symbol, and an arbitrary-radix digit encoding, which reads the whole
digest as one big number and writes it in base N.  The latter is needed
because the 71-symbol alphabet is not a power of two in size.

Both are exposed as variants of the same [`Encoder`][] interface,
selected by an [`EncodingScheme`][_types.EncodingScheme] via
[`get_encoder`][].

"""

from __future__ import annotations

import abc
import base64
import types

from typing_extensions import override

from safepwdgen import _types, basex

__all__ = ('ByteBlockEncoder', 'Encoder', 'RadixEncoder', 'get_encoder')
__author__ = 'Marco Ricci <software@the13thletter.info>'


class Encoder(abc.ABC):
    """Render a digest as a string over a fixed alphabet.

    Attributes:
        scheme:
            The encoding scheme implemented by this encoder.

    """

    scheme: _types.EncodingScheme
    """"""

    @property
    def alphabet(self) -> _types.Alphabet:
        """The alphabet of the encoded output."""
        return self.scheme.alphabet

    @abc.abstractmethod
    def encode(self, digest: bytes | bytearray, /) -> str:
        """Encode the digest.

        Args:
            digest: The digest (or any byte string) to encode.

        Returns:
            The full, untruncated encoding of `digest`.

        """
        raise NotImplementedError

    @abc.abstractmethod
    def max_length(self, digest_size: int, /) -> int:
        """Return the longest possible encoding of a `digest_size` digest."""
        raise NotImplementedError


class ByteBlockEncoder(Encoder):
    """The standard base64 encoding of the digest bytes.

    Output contains `=` padding as produced by the standard algorithm.

    Examples:
        >>> ByteBlockEncoder().encode(b'\\x00\\x10\\x83')
        'ABCD'
        >>> ByteBlockEncoder().encode(b'\\xff')
        '/w=='
        >>> ByteBlockEncoder().max_length(32)
        44

    """

    scheme = _types.EncodingScheme.BASE64

    @override
    def encode(self, digest: bytes | bytearray, /) -> str:
        return base64.standard_b64encode(digest).decode('ascii')

    @override
    def max_length(self, digest_size: int, /) -> int:
        return 4 * ((digest_size + 2) // 3)


class RadixEncoder(Encoder):
    """The digest as a big-endian number, written in base 71.

    Examples:
        >>> RadixEncoder().encode(b'')
        '!'
        >>> RadixEncoder().encode(bytes([70]))
        'z'
        >>> RadixEncoder().encode(bytes([71]))
        '-!'
        >>> RadixEncoder().max_length(32)
        42

    """

    scheme = _types.EncodingScheme.BASE71

    def __init__(self) -> None:
        self._basex = basex.BaseX(self.alphabet)

    @override
    def encode(self, digest: bytes | bytearray, /) -> str:
        return self._basex.encode(digest)

    def decode(self, text: str, /) -> int:
        """Return the number whose encoding is `text`.

        Only exact for untruncated encodings.

        """
        return self._basex.decode(text)

    @override
    def max_length(self, digest_size: int, /) -> int:
        largest = (1 << (8 * digest_size)) - 1
        return len(self._basex.digits(largest))


_ENCODERS: types.MappingProxyType[_types.EncodingScheme, Encoder] = (
    types.MappingProxyType({
        _types.EncodingScheme.BASE64: ByteBlockEncoder(),
        _types.EncodingScheme.BASE71: RadixEncoder(),
    })
)


def get_encoder(scheme: _types.EncodingScheme | str, /) -> Encoder:
    """Return the encoder for the given scheme.

    Encoders are stateless, so the returned instances are shared.

    Args:
        scheme: The encoding scheme, or its name.

    Raises:
        ValueError: The scheme is unknown.

    """
    return _ENCODERS[_types.EncodingScheme(scheme)]
