# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Types used by safepwdgen."""

from __future__ import annotations

import enum
import string
from typing import TYPE_CHECKING, Callable

from typing_extensions import (
    NamedTuple,
    NotRequired,
    TypeAlias,
    TypedDict,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typing_extensions import Any, TypeIs

__all__ = (
    'BASE64',
    'BASE71',
    'Alphabet',
    'EncodingScheme',
    'PasswordSink',
    'UserConfig',
    'is_user_config',
    'validate_user_config',
)


class Alphabet(NamedTuple):
    """An ordered set of distinct symbols, used as base-N digits.

    The position of each symbol is its digit value: `symbols[0]` is the
    digit zero, and so forth.  The radix is the number of symbols.

    Attributes:
        name:
            A short name for the alphabet, for diagnostics.
        symbols:
            The symbols, in digit order.

    """

    name: str
    """"""
    symbols: str
    """"""

    @property
    def radix(self) -> int:
        """The number of symbols in this alphabet."""
        return len(self.symbols)

    def validate(self) -> None:
        """Check that the alphabet is usable for radix conversion.

        Raises:
            ValueError:
                The alphabet has fewer than two symbols, or contains
                duplicate symbols.

        """
        if len(self.symbols) < 2:  # noqa: PLR2004
            msg = f'alphabet {self.name!r} needs at least 2 symbols'
            raise ValueError(msg)
        if len(frozenset(self.symbols)) != len(self.symbols):
            msg = f'duplicate symbols in alphabet {self.name!r}'
            raise ValueError(msg)


BASE64 = Alphabet(
    'base64',
    string.ascii_uppercase + string.ascii_lowercase + string.digits + '+/',
)
"""The standard base64 symbol table (RFC 4648), excluding padding."""
BASE64_PADDING = '='
"""The base64 padding symbol.  May appear at the end of base64 output."""
BASE71 = Alphabet(
    'base71',
    '!-_?=@/+*'
    + string.digits
    + string.ascii_uppercase
    + string.ascii_lowercase,
)
"""
Alphanumerics plus the special symbols `!-_?=@/+*`.  The order is fixed
and significant: it defines the digit values.
"""


class EncodingScheme(str, enum.Enum):
    """Ways of rendering a digest as a printable string.

    Attributes:
        BASE64:
            Byte-block encoding: the standard base64 encoding of the
            digest bytes, six bits per symbol, with `=` padding.
        BASE71:
            Arbitrary-radix digit encoding: the digest as a big-endian
            number, written in base 71 over [`BASE71`][].

    """

    BASE64 = 'base64'
    """"""
    BASE71 = 'base71'
    """"""

    __str__ = str.__str__
    __format__ = str.__format__  # type: ignore[assignment]

    @property
    def alphabet(self) -> Alphabet:
        """The alphabet that this scheme draws its symbols from."""
        return BASE71 if self is EncodingScheme.BASE71 else BASE64

    @classmethod
    def for_special_chars(cls, use_special_chars: bool, /) -> EncodingScheme:  # noqa: FBT001
        """Return the scheme selected by the "special characters" flag."""
        return cls.BASE71 if use_special_chars else cls.BASE64


class Feature(str, enum.Enum):
    """Optional features of the command-line interface.

    Attributes:
        CLIPBOARD:
            Copying the derived password to the system clipboard.

    """

    CLIPBOARD = 'clipboard'
    """"""

    __str__ = str.__str__
    __format__ = str.__format__  # type: ignore[assignment]


PasswordSink: TypeAlias = Callable[[str], None]
"""A consumer of derived passwords, e.g. standard output or a clipboard."""


# The setting names contain dashes, so the class syntax is unavailable.
UserConfigSettings = TypedDict(
    'UserConfigSettings',
    {
        'length': NotRequired[int],
        'special-chars': NotRequired[bool],
        'copy-to-clipboard': NotRequired[bool],
        'unicode-normalization-form': NotRequired[str],
    },
    total=False,
)
"""User configuration: password generation settings.

Attributes:
    length:
        Desired password length.  Non-negative.
    special-chars:
        Whether to use the 71-symbol alphabet (true) or base64
        (false).
    copy-to-clipboard:
        Whether to copy the derived password to the clipboard.  Only
        meaningful in the `defaults` section.
    unicode-normalization-form:
        The Unicode normalization form that seed passwords and service
        identifiers are expected to be in.  One of `NFC`, `NFD`, `NFKC`
        and `NFKD`.  Only meaningful in the `defaults` section.

"""


class UserConfig(TypedDict, total=False):
    r"""User configuration for safepwdgen.

    Attributes:
        defaults:
            Settings applying to every service.
        services:
            A mapping of service identifiers to settings applying to
            that service only.  These take precedence over `defaults`.

    """

    defaults: NotRequired[UserConfigSettings]
    """"""
    services: NotRequired[dict[str, UserConfigSettings]]
    """"""


_BARE_KEY_CHARACTERS = frozenset(string.ascii_letters + string.digits + '-_')


def toml_key(*parts: str) -> str:
    r"""Return a formatted TOML key, given its parts.

    Examples:
        >>> toml_key('defaults', 'length')
        'defaults.length'
        >>> toml_key('services', 'example.com', 'length')
        'services."example.com".length'
        >>> print(toml_key('services', 'tab\there'))
        services."tab\there"

    """

    def escape(part: str) -> str:
        if part and _BARE_KEY_CHARACTERS.issuperset(part):
            return part
        translated = part.translate({
            0: r'\u0000',
            8: r'\b',
            9: r'\t',
            10: r'\n',
            12: r'\f',
            13: r'\r',
            ord('"'): r'\"',
            ord('\\'): r'\\',
            127: r'\u007F',
        })
        return f'"{translated}"'

    return '.'.join(map(escape, parts))


NORMALIZATION_FORMS = frozenset({'NFC', 'NFD', 'NFKC', 'NFKD'})
"""The Unicode normalization forms known to [`unicodedata`][]."""
FORBIDDEN_SECRET_KEYS = frozenset({'seed', 'seed-password', 'password'})
"""Setting names that would store secrets.  Never allowed."""


def validate_user_config(  # noqa: C901,PLR0912
    obj: Any,  # noqa: ANN401
    /,
    *,
    allow_unknown_settings: bool = False,
) -> None:
    """Check that `obj` is a valid safepwdgen user configuration.

    Args:
        obj:
            The object to test.
        allow_unknown_settings:
            If false, abort on unknown settings.

    Raises:
        TypeError:
            An entry in the configuration, or the configuration itself,
            has the wrong type.
        ValueError:
            An entry in the configuration is not allowed, or has
            a disallowed value.

    """
    err_obj_not_a_dict = 'user config is not a dict'

    def err_not_a_dict(path: Sequence[str], /) -> str:
        return f'user config entry {toml_key(*path)} is not a table'

    def err_not_an_int(path: Sequence[str], /) -> str:
        return f'user config entry {toml_key(*path)} is not an integer'

    def err_not_a_bool(path: Sequence[str], /) -> str:
        return f'user config entry {toml_key(*path)} is not a boolean'

    def err_not_a_form(path: Sequence[str], /) -> str:
        return (
            f'user config entry {toml_key(*path)} is not a Unicode '
            f'normalization form'
        )

    def err_secret(path: Sequence[str], /) -> str:
        return (
            f'user config entry {toml_key(*path)} would store a secret; '
            f'seed passwords are never stored'
        )

    def err_unknown_setting(path: Sequence[str], /) -> str:
        return f'user config entry {toml_key(*path)} is an unknown setting'

    def err_negative(path: Sequence[str], /) -> str:
        return f'user config entry {toml_key(*path)} is negative'

    if not isinstance(obj, dict):
        raise TypeError(err_obj_not_a_dict)
    queue_to_check: list[tuple[dict[str, Any], tuple[str, ...]]] = []
    for key, value in obj.items():
        if key == 'defaults':
            if not isinstance(value, dict):
                raise TypeError(err_not_a_dict(['defaults']))
            queue_to_check.append((value, ('defaults',)))
        elif key == 'services':
            if not isinstance(value, dict):
                raise TypeError(err_not_a_dict(['services']))
            for sv_name, service in value.items():
                if not isinstance(service, dict):
                    raise TypeError(err_not_a_dict(['services', sv_name]))
                queue_to_check.append((service, ('services', sv_name)))
        elif not allow_unknown_settings:
            raise ValueError(err_unknown_setting([key]))
    for settings, path in queue_to_check:
        for key, value in settings.items():
            if key in FORBIDDEN_SECRET_KEYS:
                raise ValueError(err_secret((*path, key)))
            if key == 'length':
                # bool is a subclass of int.
                if not isinstance(value, int) or isinstance(value, bool):
                    raise TypeError(err_not_an_int((*path, key)))
                if value < 0:
                    raise ValueError(err_negative((*path, key)))
            elif key == 'special-chars' or (
                key == 'copy-to-clipboard' and path == ('defaults',)
            ):
                if not isinstance(value, bool):
                    raise TypeError(err_not_a_bool((*path, key)))
            elif key == 'unicode-normalization-form' and path == (
                'defaults',
            ):
                if value not in NORMALIZATION_FORMS:
                    raise ValueError(err_not_a_form((*path, key)))
            elif not allow_unknown_settings:
                raise ValueError(err_unknown_setting((*path, key)))


def is_user_config(obj: Any) -> TypeIs[UserConfig]:  # noqa: ANN401
    """Check if `obj` is a valid user configuration, according to typing.

    Args:
        obj: The object to test.

    Returns:
        True if this is a user configuration, false otherwise.

    """
    try:
        validate_user_config(obj, allow_unknown_settings=True)
    except (TypeError, ValueError) as exc:
        if 'user config ' not in str(exc):  # pragma: no cover
            raise  # noqa: DOC501
        return False
    return True
