# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""User-visible messages of the `safepwdgen` command-line.

Every message is an enum member whose value is a [`Message`][]: the
English text, a [`gettext`][] context, and a comment for translators.
Messages are rendered lazily via [`TranslatedString`][], so a catalog
installed under the `safepwdgen` domain is picked up transparently.

Warning:
    Non-public module (implementation detail), provided for didactical and
    educational purposes only.  Subject to change without notice, including
    removal.

"""

from __future__ import annotations

import enum
import gettext
import os
import string
from typing import TYPE_CHECKING, NamedTuple, Union

from typing_extensions import TypeAlias

from safepwdgen import _internals

if TYPE_CHECKING:
    from typing_extensions import Any

__all__ = (
    'ErrMsgTemplate',
    'InfoMsgTemplate',
    'Label',
    'Message',
    'TranslatedString',
    'WarnMsgTemplate',
)

PROG_NAME = _internals.PROG_NAME


def load_translations(
    localedir: str | os.PathLike[str] | None = None,
) -> gettext.NullTranslations:
    """Load the message catalog for the `safepwdgen` domain.

    Args:
        localedir:
            The locale directory to search.  Defaults to
            `$SAFEPWDGEN_LOCALEDIR`, or the system default locale
            directory if that is unset.

    Returns:
        The catalog, or a pass-through catalog if none is installed.

    """
    if localedir is None:
        localedir = os.environ.get(PROG_NAME.upper() + '_LOCALEDIR')
    return gettext.translation(
        PROG_NAME,
        localedir=os.fsdecode(localedir) if localedir else None,
        fallback=True,
    )


translation = load_translations()


class Message(NamedTuple):
    """A translatable message.

    Attributes:
        context:
            The [`gettext`][] context, e.g. `"help"` or `"warning"`.
        text:
            The English text.  May contain `str.format` fields.
        comments:
            Explanations for translators.

    """

    context: str
    """"""
    text: str
    """"""
    comments: str = ''
    """"""

    def fields(self) -> frozenset[str]:
        """Return the names of the `str.format` fields in the text.

        Examples:
            >>> sorted(Message('x', '{b}, then {a!r} and {b}').fields())
            ['a', 'b']
            >>> Message('x', 'plain').fields()
            frozenset()

        """
        parsed = string.Formatter().parse(self.text)
        return frozenset(
            field for _literal, field, _spec, _conv in parsed if field
        )


class TranslatedString:
    """A message that renders its translation when stringified.

    Rendering happens on first use, and is cached.  Arguments that are
    themselves `TranslatedString`s are rendered first.

    Examples:
        >>> str(TranslatedString(Label.PWD_LENGTH_METAVAR))
        'NUMBER'
        >>> str(
        ...     TranslatedString(
        ...         WarnMsgTemplate.CANNOT_COPY_TO_CLIPBOARD, error='timeout'
        ...     )
        ... )
        'Cannot copy the password to the clipboard: timeout.'

    """

    def __init__(
        self,
        template: MsgTemplate | str,
        /,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        if isinstance(template, MSG_TEMPLATE_CLASSES):
            message = template.value
            missing = message.fields() - kwargs.keys()
            if missing:
                msg = f'missing fields for {template}: {sorted(missing)!r}'
                raise TypeError(msg)
            self.message = message
        else:
            self.message = Message('', template)
        self.kwargs = kwargs
        self._rendered: str | None = None

    def __repr__(self) -> str:  # pragma: no cover
        name = self.__class__.__name__
        return f'{name}({self.message!r}, **{self.kwargs!r})'

    def __str__(self) -> str:
        if self._rendered is None:
            context, text, _comments = self.message
            if context:
                text = translation.pgettext(context, text)
            else:  # pragma: no cover
                text = translation.gettext(text)
            self._rendered = text.format(**{
                k: str(v) if isinstance(v, TranslatedString) else v
                for k, v in self.kwargs.items()
            })
        return self._rendered


class Label(enum.Enum):
    """Help texts, metavars, option group names and other labels."""

    SAFEPWDGEN_01 = Message(
        'help',
        'Derive a strong password for a service from a seed password.',
        comments='First paragraph of the command help.',
    )
    """"""
    SAFEPWDGEN_02 = Message(
        'help',
        'The same seed password and service identifier always yield '
        'the same password.  Nothing is stored: only the seed password '
        'needs to be remembered.  Passwords are printed on standard '
        'output and, by default, copied to the clipboard.',
    )
    """"""
    SAFEPWDGEN_EPILOG_01 = Message(
        'help',
        'WARNING: The seed password is hashed only once, without any key '
        'stretching.  Choose a long, random seed password.',
    )
    """"""
    CONFIGURATION_EPILOG = Message(
        'help',
        'Defaults for the password length, the use of special characters '
        'and the clipboard can be set globally and per service in '
        'the configuration file {path_metavar}.  Options given on the '
        'command-line take precedence.',
        comments='{path_metavar} is Label.CONFIGURATION_PATH_METAVAR.',
    )
    """"""
    CONFIGURATION_PATH_METAVAR = Message(
        'metavar',
        'CONFIG_DIR/config.toml',
        comments='A placeholder for the path, not a literal file name.',
    )
    """"""
    SEED_PASSWORD_HELP_TEXT = Message(
        'help',
        'Derive passwords from the seed password {metavar}.  '
        'If not given, prompt for it.',
    )
    """"""
    SEED_PASSWORD_METAVAR = Message('metavar', 'PASSWORD')
    """"""
    SERVICE_IDENTIFIER_HELP_TEXT = Message(
        'help',
        'Derive the password for the service {metavar}, '
        'e.g. a domain name.  Required.',
    )
    """"""
    SERVICE_IDENTIFIER_METAVAR = Message('metavar', 'SERVICE')
    """"""
    PWD_LENGTH_HELP_TEXT = Message(
        'help',
        'Derive a password of {metavar} characters (default: 20).  '
        'At most 44 characters (42 with special characters) '
        'are available.',
    )
    """"""
    PWD_LENGTH_METAVAR = Message('metavar', 'NUMBER')
    """"""
    SPECIAL_CHARS_HELP_TEXT = Message(
        'help',
        'Also use the special characters !-_?=@/+* (default: true).',
        comments='The special characters are listed verbatim.',
    )
    """"""
    SPECIAL_CHARS_METAVAR = Message('metavar', 'BOOLEAN')
    """"""
    COPY_HELP_TEXT = Message(
        'help',
        'Copy the derived password to the clipboard (default: yes).',
    )
    """"""
    DEBUG_OPTION_HELP_TEXT = Message(
        'help', 'Also emit debug information.  Implies --verbose.'
    )
    """"""
    HELP_OPTION_HELP_TEXT = Message('help', 'Show this help text, then exit.')
    """"""
    QUIET_OPTION_HELP_TEXT = Message(
        'help', 'Suppress even warnings; emit only errors.'
    )
    """"""
    VERBOSE_OPTION_HELP_TEXT = Message(
        'help', 'Also report what is being done, on standard error.'
    )
    """"""
    VERSION_OPTION_HELP_TEXT = Message(
        'help', 'Show version and feature information, then exit.'
    )
    """"""
    CONFIGURATION_LABEL = Message('option group', 'Configuration')
    """"""
    LOGGING_LABEL = Message('option group', 'Logging')
    """"""
    OTHER_OPTIONS_LABEL = Message('option group', 'Other options')
    """"""
    PASSWORD_GENERATION_LABEL = Message('option group', 'Password generation')
    """"""
    SEED_PASSWORD_DESCRIPTION = Message(
        'noun',
        'seed password',
        comments='Fills {what} in WarnMsgTemplate.TEXT_NOT_NORMALIZED.',
    )
    """"""
    SERVICE_IDENTIFIER_DESCRIPTION = Message(
        'noun',
        'service identifier',
        comments='Fills {what} in WarnMsgTemplate.TEXT_NOT_NORMALIZED.',
    )
    """"""
    SEED_PASSWORD_PROMPT_TEXT = Message('prompt', 'Seed password')
    """"""
    VERSION_INFO_MAJOR_LIBRARY_TEXT = Message(
        'version',
        'Using {dependency_name_and_version}',
        comments='E.g. "Using click 8.2.1".',
    )
    """"""
    SUPPORTED_FEATURES = Message(
        'version',
        'Supported features:',
        comments='Followed by a comma-separated list, ending in a period.',
    )
    """"""
    UNAVAILABLE_FEATURES = Message(
        'version',
        'Known features not installed or not available:',
        comments='Followed by a comma-separated list, ending in a period.',
    )
    """"""
    SUPPORTED_ENCODING_SCHEMES = Message(
        'version',
        'Supported encoding schemes:',
        comments='Followed by a comma-separated list, ending in a period.',
    )
    """"""


class InfoMsgTemplate(enum.Enum):
    """Messages shown with `--verbose`."""

    COPIED_TO_CLIPBOARD = Message(
        'info',
        'Copied the password to the clipboard (via {tool}).',
        comments='{tool} is the clipboard program, e.g. "xclip".',
    )
    """"""
    PASSWORD_SHORTER_THAN_REQUESTED = Message(
        'info',
        'The derived password has only {actual} characters, '
        'instead of the requested {requested}.',
    )
    """"""
    USING_SERVICE_SETTINGS = Message(
        'info',
        'Using the settings in the user configuration section {key}.',
        comments='{key} is a TOML key such as services."example.com".',
    )
    """"""


class WarnMsgTemplate(enum.Enum):
    """Warnings.  These never change the exit status."""

    PASSWORD_SIZE_TOO_BIG = Message(
        'warning',
        'Requested password size too big, reset to {max_length}.  '
        'The derived password will have at most {available} characters.',
        comments=(
            'Nothing is actually truncated to {max_length}: derivation '
            'proceeds, and yields the whole encoded digest of at most '
            '{available} characters.'
        ),
    )
    """"""
    EMPTY_SEED_PASSWORD = Message(
        'warning',
        'The seed password is empty.  Anyone can derive the same '
        'passwords.',
    )
    """"""
    TEXT_NOT_NORMALIZED = Message(
        'warning',
        'The {what} is not {form}-normalized.  Its serialization as '
        'a byte string may not be what you expect it to be, even if it '
        '*displays* correctly.  Please make sure to double-check any '
        'derived passwords for unexpected results.',
        comments=(
            '{what} is Label.SEED_PASSWORD_DESCRIPTION or '
            'Label.SERVICE_IDENTIFIER_DESCRIPTION.  '
            '{form} is one of NFC, NFD, NFKC or NFKD.'
        ),
    )
    """"""
    CANNOT_COPY_TO_CLIPBOARD = Message(
        'warning',
        'Cannot copy the password to the clipboard: {error}.',
    )
    """"""


class ErrMsgTemplate(enum.Enum):
    """Fatal errors.  These exit with status 1."""

    CANNOT_READ_USER_CONFIG = Message(
        'error',
        'Cannot load user config: {error}: {filename!r}.',
        comments='{error} is the operating system error description.',
    )
    """"""
    CANNOT_PARSE_USER_CONFIG = Message(
        'error',
        'Cannot load user config: {error}.',
        comments='{error} is supplied by the TOML parser.',
    )
    """"""
    INVALID_USER_CONFIG = Message(
        'error',
        'The user configuration file is invalid.  {error}.',
        comments='{error} is supplied by the configuration validator.',
    )
    """"""
    HASH_FUNCTION_UNAVAILABLE = Message(
        'error',
        'Cannot derive the password: this Python does not support SHA-256.',
    )
    """"""
    CANNOT_ENCODE_INPUT = Message(
        'error',
        'Cannot derive the password: the input cannot be encoded '
        'as UTF-8: {error}.',
    )
    """"""


MsgTemplate: TypeAlias = Union[
    Label,
    InfoMsgTemplate,
    WarnMsgTemplate,
    ErrMsgTemplate,
]
"""Any enum whose members are [`Message`][]s."""
MSG_TEMPLATE_CLASSES = (
    Label,
    InfoMsgTemplate,
    WarnMsgTemplate,
    ErrMsgTemplate,
)
