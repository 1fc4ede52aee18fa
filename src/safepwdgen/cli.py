# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

# ruff: noqa: TRY400

"""Command-line interface for safepwdgen."""

from __future__ import annotations

import collections
import logging
import subprocess
from typing import TYPE_CHECKING, Final, NoReturn

import click
from click.core import ParameterSource
from typing_extensions import Any

from safepwdgen import _internals, _types, generator
from safepwdgen._internals import cli_helpers, cli_machinery
from safepwdgen._internals import cli_messages as _msg

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ('safepwdgen',)

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION

DEFAULT_SETTINGS: Mapping[str, Any] = {
    'length': generator.SafePwdGen.STD_PWD_LENGTH,
    'special-chars': True,
    'copy-to-clipboard': True,
    'unicode-normalization-form': 'NFC',
}
"""Built-in settings, used if neither command-line nor config set them."""


class _SafePwdGenContext:
    """The context for the `safepwdgen` command-line interface.

    This context object -- wrapping a [`click.Context`][] object --
    encapsulates a single call to the `safepwdgen` command-line.  It is
    an implementation detail of the command-line and should not be
    instantiated directly by users or API clients.

    Attributes:
        logger:
            The logger used for info messages, warnings and error
            messages.
        ctx:
            The underlying [`click.Context`][] from which the
            command-line settings and parameter values are queried.

    """

    logger: Final = logging.getLogger(PROG_NAME)
    """"""
    ctx: Final[click.Context]
    """"""

    def __init__(self, ctx: click.Context, /) -> None:
        self.ctx = ctx

    def err(self, msg: Any, /, **kwargs: Any) -> NoReturn:  # noqa: ANN401
        """Log an error, then abort the function call.

        We ensure that color handling is done properly before the error
        is logged.

        """
        stacklevel = kwargs.pop('stacklevel', 1)
        stacklevel += 1
        extra = kwargs.pop('extra', {})
        extra.setdefault('color', self.ctx.color)
        self.logger.error(msg, stacklevel=stacklevel, extra=extra, **kwargs)
        self.ctx.exit(1)

    def warning(self, msg: Any, /, **kwargs: Any) -> None:  # noqa: ANN401
        """Log a warning.

        We ensure that color handling is done properly before the
        warning is logged.

        """
        stacklevel = kwargs.pop('stacklevel', 1)
        stacklevel += 1
        extra = kwargs.pop('extra', {})
        extra.setdefault('color', self.ctx.color)
        self.logger.warning(msg, stacklevel=stacklevel, extra=extra, **kwargs)

    def info(self, msg: Any, /, **kwargs: Any) -> None:  # noqa: ANN401
        """Log an info message.

        We ensure that color handling is done properly before the
        message is logged.

        """
        stacklevel = kwargs.pop('stacklevel', 1)
        stacklevel += 1
        extra = kwargs.pop('extra', {})
        extra.setdefault('color', self.ctx.color)
        self.logger.info(msg, stacklevel=stacklevel, extra=extra, **kwargs)

    def get_user_config(self) -> _types.UserConfig:
        """Return the user configuration stored on disk.

        If no configuration is stored, return an empty configuration.
        Abort if the configuration cannot be read, or is invalid.

        """
        try:
            config = cli_helpers.load_user_config()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            if exc.filename is None:
                self.err(
                    _msg.TranslatedString(
                        _msg.ErrMsgTemplate.CANNOT_PARSE_USER_CONFIG,
                        error=exc.strerror or exc,
                    ),
                )
            self.err(
                _msg.TranslatedString(
                    _msg.ErrMsgTemplate.CANNOT_READ_USER_CONFIG,
                    error=exc.strerror,
                    filename=exc.filename,
                ),
            )
        except Exception as exc:  # noqa: BLE001
            self.err(
                _msg.TranslatedString(
                    _msg.ErrMsgTemplate.CANNOT_PARSE_USER_CONFIG,
                    error=exc,
                ),
                exc_info=exc,
            )
        try:
            _types.validate_user_config(config)
        except (TypeError, ValueError) as exc:
            self.err(
                _msg.TranslatedString(
                    _msg.ErrMsgTemplate.INVALID_USER_CONFIG,
                    error=exc,
                ),
            )
        assert _types.is_user_config(config)
        return config

    def get_settings(
        self,
        configuration: _types.UserConfig,
        /,
    ) -> collections.ChainMap[str, Any]:
        """Return the effective settings for the requested service.

        Settings given on the command-line take precedence over the
        service-specific settings, which take precedence over the
        default settings in the user configuration, which in turn take
        precedence over the built-in [`DEFAULT_SETTINGS`][].

        Args:
            configuration:
                The user configuration, parsed from disk.

        Returns:
            The effective settings, as a [chained
            map][collections.ChainMap].  The first map holds the
            settings given on the command-line.

        """
        params = self.ctx.params
        service = params['service']
        command_line_settings: dict[str, Any] = {}
        if params['length'] is not None:
            command_line_settings['length'] = params['length']
        if params['special_chars'] is not None:
            command_line_settings['special-chars'] = params['special_chars']
        if self.ctx.get_parameter_source('copy_to_clipboard') not in {
            None,
            ParameterSource.DEFAULT,
            ParameterSource.DEFAULT_MAP,
        }:
            command_line_settings['copy-to-clipboard'] = params[
                'copy_to_clipboard'
            ]
        service_settings = configuration.get('services', {}).get(service, {})
        if service_settings:
            self.info(
                _msg.TranslatedString(
                    _msg.InfoMsgTemplate.USING_SERVICE_SETTINGS,
                    key=_types.toml_key('services', service),
                )
            )
        return collections.ChainMap(
            command_line_settings,
            dict(service_settings),
            dict(configuration.get('defaults', {})),
            dict(DEFAULT_SETTINGS),
        )

    def get_seed_password(self, *, form: str) -> str:
        """Return the seed password, prompting for it if necessary.

        Warn if the seed password is empty, or is not normalized in the
        given Unicode normalization form.

        """
        seed = self.ctx.params['seed_password']
        if seed is None:
            seed = cli_helpers.prompt_for_passphrase()
        if not seed:
            self.warning(
                _msg.TranslatedString(_msg.WarnMsgTemplate.EMPTY_SEED_PASSWORD)
            )
        else:
            cli_helpers.check_for_misleading_text(
                _msg.Label.SEED_PASSWORD_DESCRIPTION,
                seed,
                form=form,
                ctx=self.ctx,
            )
        return seed

    def derive_password(
        self,
        seed: str,
        service: str,
        /,
        *,
        length: int,
        use_special_chars: bool,
    ) -> str:
        """Derive the service password, aborting on failure.

        Warn if the requested length exceeds the advisory maximum for
        the selected alphabet, and report (at info level) if the derived
        password is shorter than requested.

        """
        max_length = generator.SafePwdGen.advisory_max_length(
            use_special_chars
        )
        if length > max_length:
            self.warning(
                _msg.TranslatedString(
                    _msg.WarnMsgTemplate.PASSWORD_SIZE_TOO_BIG,
                    max_length=max_length,
                    available=generator.SafePwdGen.max_encoded_length(
                        use_special_chars
                    ),
                )
            )
        try:
            password = generator.create_password(
                seed, service, length, use_special_chars
            )
        except generator.AlgorithmUnavailableError as exc:
            self.err(
                _msg.TranslatedString(
                    _msg.ErrMsgTemplate.HASH_FUNCTION_UNAVAILABLE
                ),
                exc_info=exc,
            )
        except generator.EncodingError as exc:
            self.err(
                _msg.TranslatedString(
                    _msg.ErrMsgTemplate.CANNOT_ENCODE_INPUT,
                    error=exc.__cause__ if exc.__cause__ is not None else exc,
                ),
            )
        if len(password) < length:
            self.info(
                _msg.TranslatedString(
                    _msg.InfoMsgTemplate.PASSWORD_SHORTER_THAN_REQUESTED,
                    actual=len(password),
                    requested=length,
                )
            )
        return password

    def print_password(self, password: str, /) -> None:
        """Emit the password, alone, on standard output."""
        click.echo(password, color=self.ctx.color)

    def copy_password(self, password: str, /) -> None:
        """Copy the password to the clipboard.

        Failure to do so is only a warning.

        """
        try:
            tool = cli_helpers.copy_to_clipboard(password)
        except (
            cli_helpers.ClipboardUnavailableError,
            OSError,
            subprocess.SubprocessError,
        ) as exc:
            self.warning(
                _msg.TranslatedString(
                    _msg.WarnMsgTemplate.CANNOT_COPY_TO_CLIPBOARD,
                    error=exc,
                )
            )
        else:
            self.info(
                _msg.TranslatedString(
                    _msg.InfoMsgTemplate.COPIED_TO_CLIPBOARD,
                    tool=tool,
                )
            )

    def run(self) -> None:
        """Derive the service password and hand it to the output sinks."""
        configuration = self.get_user_config()
        settings = self.get_settings(configuration)
        form = settings['unicode-normalization-form']
        service = self.ctx.params['service']
        seed = self.get_seed_password(form=form)
        cli_helpers.check_for_misleading_text(
            _msg.Label.SERVICE_IDENTIFIER_DESCRIPTION,
            service,
            form=form,
            ctx=self.ctx,
        )
        password = self.derive_password(
            seed,
            service,
            length=settings['length'],
            use_special_chars=settings['special-chars'],
        )
        sinks: list[_types.PasswordSink] = [self.print_password]
        if settings['copy-to-clipboard']:
            sinks.append(self.copy_password)
        for sink in sinks:
            sink(password)


@click.command(
    context_settings={'help_option_names': ['-h', '--help']},
    cls=cli_machinery.SafePwdGenCommand,
    help='\n\n'.join([
        str(_msg.TranslatedString(_msg.Label.SAFEPWDGEN_01)),
        str(_msg.TranslatedString(_msg.Label.SAFEPWDGEN_02)),
    ]),
    epilog=str(_msg.TranslatedString(_msg.Label.SAFEPWDGEN_EPILOG_01)),
)
@click.option(
    '-s',
    '--seed-password',
    'seed_password',
    metavar=str(_msg.TranslatedString(_msg.Label.SEED_PASSWORD_METAVAR)),
    default=None,
    help=str(
        _msg.TranslatedString(
            _msg.Label.SEED_PASSWORD_HELP_TEXT,
            metavar=_msg.TranslatedString(_msg.Label.SEED_PASSWORD_METAVAR),
        )
    ),
    cls=cli_machinery.PasswordGenerationOption,
)
@click.option(
    '-i',
    '--service-identifier',
    'service',
    metavar=str(_msg.TranslatedString(_msg.Label.SERVICE_IDENTIFIER_METAVAR)),
    required=True,
    help=str(
        _msg.TranslatedString(
            _msg.Label.SERVICE_IDENTIFIER_HELP_TEXT,
            metavar=_msg.TranslatedString(
                _msg.Label.SERVICE_IDENTIFIER_METAVAR
            ),
        )
    ),
    cls=cli_machinery.PasswordGenerationOption,
)
@click.option(
    '-l',
    '--pwd-length',
    'length',
    metavar=str(_msg.TranslatedString(_msg.Label.PWD_LENGTH_METAVAR)),
    default=None,
    callback=cli_machinery.validate_length,
    help=str(
        _msg.TranslatedString(
            _msg.Label.PWD_LENGTH_HELP_TEXT,
            metavar=_msg.TranslatedString(_msg.Label.PWD_LENGTH_METAVAR),
        )
    ),
    cls=cli_machinery.ConfigurationOption,
)
@click.option(
    '-c',
    '--special-chars',
    'special_chars',
    type=click.BOOL,
    metavar=str(_msg.TranslatedString(_msg.Label.SPECIAL_CHARS_METAVAR)),
    default=None,
    help=str(_msg.TranslatedString(_msg.Label.SPECIAL_CHARS_HELP_TEXT)),
    cls=cli_machinery.ConfigurationOption,
)
@click.option(
    '--copy/--no-copy',
    'copy_to_clipboard',
    default=True,
    help=str(_msg.TranslatedString(_msg.Label.COPY_HELP_TEXT)),
    cls=cli_machinery.ConfigurationOption,
)
@cli_machinery.version_option
@cli_machinery.standard_logging_options
@click.pass_context
def safepwdgen(
    ctx: click.Context,
    /,
    **_kwargs: Any,  # noqa: ANN401
) -> None:
    """Derive a strong password for a service from a seed password.

    This is a [`click`][CLICK]-powered command-line interface function,
    and not intended for programmatic use.  Call
    [`generator.create_password`][] instead.  (See also
    [`click.testing.CliRunner`][] for controlled, programmatic
    invocation.)

    [CLICK]: https://pypi.org/package/click/

    Parameters:
        ctx (click.Context):
            The `click` context.

    Other Parameters:
        seed_password (str | None):
            Command-line argument `-s`/`--seed-password`.  The seed
            password.  If not given, prompt for it.
        service (str):
            Command-line argument `-i`/`--service-identifier`.  The
            service identifier.
        length (int | None):
            Command-line argument `-l`/`--pwd-length`.  Override the
            configured password length.
        special_chars (bool | None):
            Command-line argument `-c`/`--special-chars`.  Override the
            configured choice of alphabet.
        copy_to_clipboard (bool):
            Command-line argument `--copy`/`--no-copy`.  Override the
            configured clipboard use.

    """
    _SafePwdGenContext(ctx).run()


if __name__ == '__main__':
    safepwdgen()
