# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Deterministic derivation of service passwords from a seed password."""

from __future__ import annotations

import hashlib
import logging

from safepwdgen import _types, encoding

__all__ = (
    'AlgorithmUnavailableError',
    'EncodingError',
    'SafePwdGen',
    'SafePwdGenError',
    'create_password',
)
__author__ = 'Marco Ricci <software@the13thletter.info>'

logger = logging.getLogger(__name__)


class SafePwdGen:
    """A deterministic, stateless password generator.

    Derive passwords for named services, given only a seed password.
    The derivation is deterministic and non-secret; only the seed
    password need be kept secret.  The service identifier (e.g.
    a domain name) may be public.

    The derivation hashes the concatenation of seed password and
    service identifier (no separator, no length prefix) with SHA-256,
    renders the 32-byte digest as a printable string, and truncates
    that string to the desired length.  The digest is rendered either
    in base64, or, if special characters are requested, in base 71 over
    alphanumerics plus `!-_?=@/+*`.

    Note:
        This is a single fast hash, not a key-stretching password-based
        key derivation function.  Weak seed passwords are correspondingly
        easy to brute-force given a single derived password.

    """

    HASH_NAME = 'sha256'
    """The [`hashlib`][] name of the hash function."""
    STD_PWD_LENGTH = 20
    """The default password length."""
    MAX_PWD_LENGTH_64 = 86
    """Advisory maximum password length for the base64 alphabet."""
    MAX_PWD_LENGTH_71 = 84
    """Advisory maximum password length for the 71-symbol alphabet."""
    DIGEST_SIZE = 32
    """The size, in bytes, of the hash function's digest."""

    def __init__(
        self,
        *,
        seed: bytes | bytearray | str = b'',
        length: int = STD_PWD_LENGTH,
        use_special_chars: bool = True,
    ) -> None:
        """Initialize the generator.

        Args:
            seed:
                The seed password from which to derive the service
                passwords.  If a string, then the UTF-8 encoding of the
                string is used.
            length:
                Desired password length.  The password will be shorter
                if the encoded digest is shorter.
            use_special_chars:
                If true, use the 71-symbol alphabet, else base64.

        Raises:
            EncodingError:
                The seed password cannot be encoded as UTF-8.
            TypeError:
                `length` is not an integer.
            ValueError:
                `length` is negative.

        """
        self._seed = self._get_binary_string(seed)
        self._length = self._check_length(length)
        self._scheme = _types.EncodingScheme.for_special_chars(
            use_special_chars
        )

    @staticmethod
    def _check_length(length: int, /) -> int:
        # bool is a subclass of int.
        if not isinstance(length, int) or isinstance(length, bool):
            msg = f'invalid password length: not an integer: {length!r}'
            raise TypeError(msg)
        if length < 0:
            msg = f'invalid password length: {length!r}'
            raise ValueError(msg)
        return length

    @staticmethod
    def _get_binary_string(s: bytes | bytearray | str, /) -> bytes:
        """Convert the input string to a read-only, binary string.

        If it is a text string, return the string's UTF-8
        representation.

        Args:
            s: The string to (check and) convert.

        Returns:
            A read-only, binary copy of the string.

        Raises:
            EncodingError:
                The text string has no UTF-8 representation, e.g.
                because it contains lone surrogates.

        """
        if isinstance(s, str):
            try:
                return s.encode('UTF-8')
            except UnicodeError as exc:
                msg = f'cannot encode as UTF-8: {exc}'
                raise EncodingError(msg) from exc
        return bytes(s)

    @classmethod
    def advisory_max_length(cls, use_special_chars: bool, /) -> int:  # noqa: FBT001
        """Return the advisory maximum password length for an alphabet.

        Longer requests cannot be satisfied; the derived password will
        be as long as the encoded digest, which is shorter still.  This
        is informative only: derivation never fails on long requests.

        """
        return (
            cls.MAX_PWD_LENGTH_71
            if use_special_chars
            else cls.MAX_PWD_LENGTH_64
        )

    @classmethod
    def max_encoded_length(cls, use_special_chars: bool, /) -> int:  # noqa: FBT001
        """Return the length of the longest password an alphabet yields.

        This is the longest encoding of any digest, so some digests
        yield shorter passwords.

        Examples:
            >>> SafePwdGen.max_encoded_length(False)
            44
            >>> SafePwdGen.max_encoded_length(True)
            42

        """
        scheme = _types.EncodingScheme.for_special_chars(use_special_chars)
        return encoding.get_encoder(scheme).max_length(cls.DIGEST_SIZE)

    @classmethod
    def create_hash(
        cls,
        seed: bytes | bytearray | str,
        service: bytes | bytearray | str,
    ) -> bytes:
        r"""Hash the seed password and the service identifier.

        Args:
            seed:
                The seed password.  If a string, then the UTF-8
                encoding of the string is used.
            service:
                The service identifier.  If a string, then the UTF-8
                encoding of the string is used.

        Returns:
            The 32-byte SHA-256 digest of the seed password followed
            directly by the service identifier.

        Raises:
            AlgorithmUnavailableError:
                This Python does not provide the hash function.
            EncodingError:
                An input has no UTF-8 representation.

        Examples:
            >>> SafePwdGen.create_hash('', '').hex()[:16]
            'e3b0c44298fc1c14'
            >>> SafePwdGen.create_hash('ab', 'c') == SafePwdGen.create_hash(
            ...     b'a', 'bc'
            ... )
            True

        """
        message = cls._get_binary_string(seed) + cls._get_binary_string(
            service
        )
        try:
            hasher = hashlib.new(cls.HASH_NAME)
        except ValueError as exc:
            msg = f'hash function {cls.HASH_NAME!r} is unavailable'
            raise AlgorithmUnavailableError(msg) from exc
        hasher.update(message)
        return hasher.digest()

    @staticmethod
    def encode(
        digest: bytes | bytearray,
        scheme: _types.EncodingScheme | str,
        /,
    ) -> str:
        """Render a digest as a string, per the given scheme.

        Args:
            digest: The digest to render.
            scheme: The encoding scheme to use.

        Returns:
            The full, untruncated encoding.

        """
        return encoding.get_encoder(scheme).encode(digest)

    def generate(
        self,
        service: bytes | bytearray | str,
        /,
        *,
        seed: bytes | bytearray | str = b'',
    ) -> str:
        """Generate a service password.

        Args:
            service:
                The service identifier.  If a string, then the UTF-8
                encoding of the string is used.
            seed:
                If given, override the seed password given during
                construction.  If a string, then the UTF-8 encoding of
                the string is used.

        Returns:
            The service password: a prefix of the encoded digest, of
            the desired length or the full encoded digest, whichever is
            shorter.

        Raises:
            AlgorithmUnavailableError:
                This Python does not provide the hash function.
            EncodingError:
                An input has no UTF-8 representation.

        Examples:
            >>> gen = SafePwdGen(seed='correct horse', length=8)
            >>> gen.generate('example.com') == gen.generate(b'example.com')
            True
            >>> len(gen.generate('example.com'))
            8
            >>> SafePwdGen(seed='correct horse', length=0).generate('x')
            ''

        """
        seed = self._get_binary_string(seed) if seed else self._seed
        digest = self.create_hash(seed, service)
        encoded = self.encode(digest, self._scheme)
        logger.debug(
            'Encoded digest in %s: %d symbols, %d requested',
            self._scheme,
            len(encoded),
            self._length,
        )
        return encoded[: min(self._length, len(encoded))]


def create_password(
    seed: bytes | bytearray | str,
    service: bytes | bytearray | str,
    length: int = SafePwdGen.STD_PWD_LENGTH,
    use_special_chars: bool = True,  # noqa: FBT001,FBT002
) -> str:
    """Derive the password for a service from the seed password.

    Args:
        seed:
            The secret seed password.
        service:
            The (public) service identifier, e.g. `"example.com"`.
        length:
            Desired password length.  Non-negative.  Requests beyond
            the length of the encoded digest (44 symbols in base64, at
            most 42 symbols in base 71) silently yield the full encoded
            digest.
        use_special_chars:
            If true, draw from alphanumerics plus `!-_?=@/+*` (base 71),
            else from the base64 alphabet.

    Returns:
        The derived password.

    Raises:
        AlgorithmUnavailableError:
            This Python does not provide the hash function.
        EncodingError:
            An input has no UTF-8 representation.
        TypeError:
            `length` is not an integer.
        ValueError:
            `length` is negative.

    Examples:
        >>> create_password('correct horse', 'example.com', length=0)
        ''
        >>> len(create_password('s', 'example.com', 200, False))
        44

    """
    return SafePwdGen(
        length=length, use_special_chars=use_special_chars
    ).generate(service, seed=seed)


class SafePwdGenError(Exception):
    """Password derivation failed."""


class AlgorithmUnavailableError(SafePwdGenError):
    """The required hash function is not available in this Python."""


class EncodingError(SafePwdGenError, ValueError):
    """A text input could not be converted to bytes."""
