# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Command-line machinery for safepwdgen.

Logging to standard error, grouped `--help` output, and the shared
options and callbacks of the `safepwdgen` command.

Warning:
    Non-public module (implementation detail), provided for didactical and
    educational purposes only. Subject to change without notice, including
    removal.

"""

from __future__ import annotations

import contextlib
import importlib.metadata
import logging
import textwrap
from typing import TYPE_CHECKING, Callable, TypeVar

import click
from typing_extensions import Any, ParamSpec

from safepwdgen import _internals, _types
from safepwdgen._internals import cli_helpers
from safepwdgen._internals import cli_messages as _msg

if TYPE_CHECKING:
    from collections.abc import Iterator

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION
PACKAGE_NAME = PROG_NAME.replace('-', '_')
VERSION_OUTPUT_WRAPPING_WIDTH = 72

# Error messages
NOT_AN_INTEGER = 'not an integer'
NOT_A_NONNEGATIVE_INTEGER = 'not a non-negative integer'

P = ParamSpec('P')
R = TypeVar('R')


# Logging
# =======


class ClickEchoStderrHandler(logging.Handler):
    """A [`logging.Handler`][] writing to standard error via [`click.echo`][].

    A `color` attribute on the log record, if any, is passed on to
    [`click.echo`][].

    """

    def emit(self, record: logging.LogRecord) -> None:
        click.echo(
            self.format(record),
            err=True,
            color=getattr(record, 'color', None),
        )


class CLIofPackageFormatter(logging.Formatter):
    """Format log records as diagnostics of a command-line program.

    Every line of the message is prefixed with the program name and,
    for debug messages and warnings, a level label:

        >>> formatter = CLIofPackageFormatter(prog_name='prog')
        >>> record = logging.makeLogRecord({
        ...     'levelno': logging.DEBUG,
        ...     'levelname': 'DEBUG',
        ...     'msg': 'one\\ntwo',
        ... })
        >>> print(formatter.format(record))
        prog: Debug: one
        prog: Debug: two

    Info and error messages carry no label.

    """

    LABELS = {
        logging.DEBUG: 'Debug: ',
        logging.INFO: '',
        logging.ERROR: '',
        logging.CRITICAL: '',
    }

    def __init__(self, *, prog_name: str = PROG_NAME) -> None:
        super().__init__()
        self.prog_name = prog_name

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.WARNING:
            label = f'{click.style("Warning", bold=True)}: '
        else:
            try:
                label = self.LABELS[record.levelno]
            except KeyError:  # pragma: no cover
                msg = f'Unsupported logging level: {record.levelname}'
                raise AssertionError(msg) from None
        prefix = f'{self.prog_name}: {label}'
        text = ''.join(
            prefix + line
            for line in record.getMessage().splitlines(keepends=True)
        )
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text


CLI_HANDLER = ClickEchoStderrHandler()
"""The handler for all of `safepwdgen`'s diagnostics.  Shows warnings."""
CLI_HANDLER.addFilter(logging.Filter(PACKAGE_NAME))
CLI_HANDLER.setFormatter(CLIofPackageFormatter())
CLI_HANDLER.setLevel(logging.WARNING)


@contextlib.contextmanager
def standard_logging() -> Iterator[logging.Handler]:
    """Attach [`CLI_HANDLER`][] to the package logger, for the duration.

    If the handler is already attached, leave it attached afterwards.

    """
    logger = logging.getLogger(PACKAGE_NAME)
    attach = CLI_HANDLER not in logger.handlers
    if attach:
        logger.addHandler(CLI_HANDLER)
    try:
        yield CLI_HANDLER
    finally:
        if attach:
            logger.removeHandler(CLI_HANDLER)


def adjust_logging_level(
    ctx: click.Context,
    param: click.Parameter,
    value: int | None,
) -> None:
    """Emit log records at level `value` and above to standard error.

    Callback for the `-v`, `-q` and `--debug` options.

    """
    del param
    if value is None or ctx.resilient_parsing:
        return
    CLI_HANDLER.setLevel(value)
    logging.getLogger(PACKAGE_NAME).setLevel(value)


# Help output
# ===========


class GroupedOption(click.Option):
    """A [`click.Option`][] listed under its own heading in `--help`.

    Subclasses set the heading and, optionally, a paragraph to print
    after the group's options.

    """

    group: str = ''
    epilog: str = ''


class PasswordGenerationOption(GroupedOption):
    group = str(_msg.TranslatedString(_msg.Label.PASSWORD_GENERATION_LABEL))


class ConfigurationOption(GroupedOption):
    group = str(_msg.TranslatedString(_msg.Label.CONFIGURATION_LABEL))
    epilog = str(
        _msg.TranslatedString(
            _msg.Label.CONFIGURATION_EPILOG,
            path_metavar=_msg.TranslatedString(
                _msg.Label.CONFIGURATION_PATH_METAVAR
            ),
        )
    )


class LoggingOption(GroupedOption):
    group = str(_msg.TranslatedString(_msg.Label.LOGGING_LABEL))


class SafePwdGenCommand(click.Command):
    """The `safepwdgen` command.

    Options are listed in `--help` under the heading of their
    [`GroupedOption`][] subclass, in order of first appearance.
    Ungrouped options, such as `--help` itself, come last, under
    "Other options".

    Calling [`main`][click.Command.main] sets up [standard
    logging][standard_logging] for the duration of the call.

    """

    def main(self, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        with standard_logging():
            return super().main(*args, **kwargs)

    def get_help_option(self, ctx: click.Context) -> click.Option | None:
        option = super().get_help_option(ctx)
        if option is not None:
            option.help = str(
                _msg.TranslatedString(_msg.Label.HELP_OPTION_HELP_TEXT)
            )
        return option

    def format_options(
        self, ctx: click.Context, formatter: click.HelpFormatter
    ) -> None:
        groups: dict[str, list[tuple[str, str]]] = {}
        epilogs: dict[str, str] = {}
        other: list[tuple[str, str]] = []
        for param in self.get_params(ctx):
            record = param.get_help_record(ctx)
            if record is None:
                continue
            if isinstance(param, GroupedOption):
                groups.setdefault(param.group, []).append(record)
                epilogs.setdefault(param.group, param.epilog)
            else:
                other.append(record)
        if other:
            groups[
                str(_msg.TranslatedString(_msg.Label.OTHER_OPTIONS_LABEL))
            ] = other
        for name, records in groups.items():
            with formatter.section(name):
                formatter.write_dl(records)
            if epilogs.get(name):
                formatter.write_paragraph()
                with formatter.indentation():
                    formatter.write_text(epilogs[name])


# Callbacks and options
# =====================


def validate_length(
    ctx: click.Context,
    param: click.Parameter,
    value: Any,  # noqa: ANN401
) -> int | None:
    """Check that the length is a non-negative integer, if given.

    Raises:
        click.BadParameter: The parameter value is invalid.

    """
    del ctx, param
    if value is None:
        return None
    if isinstance(value, int):
        int_value = value
    else:
        try:
            int_value = int(value, 10)
        except ValueError as exc:
            raise click.BadParameter(NOT_AN_INTEGER) from exc
    if int_value < 0:
        raise click.BadParameter(NOT_A_NONNEGATIVE_INTEGER)
    return int_value


def format_version_list(label: _msg.Label, items: list[str]) -> str:
    """Format a labelled, comma-separated list, wrapped for version output.

    Examples:
        >>> print(
        ...     format_version_list(
        ...         _msg.Label.SUPPORTED_ENCODING_SCHEMES, ['base64', 'base71']
        ...     )
        ... )
        Supported encoding schemes: base64, base71.

    """
    return textwrap.fill(
        ' '.join([str(_msg.TranslatedString(label)), ', '.join(items) + '.']),
        width=VERSION_OUTPUT_WRAPPING_WIDTH,
        subsequent_indent='    ',
        break_on_hyphens=False,
    )


def version_option_callback(
    ctx: click.Context,
    param: click.Parameter,
    value: bool,  # noqa: FBT001
) -> None:
    """Print version, library and feature information, then exit."""
    del param
    if not value or ctx.resilient_parsing:
        return
    click.echo(f'{PROG_NAME} {VERSION}')
    click.echo(
        str(
            _msg.TranslatedString(
                _msg.Label.VERSION_INFO_MAJOR_LIBRARY_TEXT,
                dependency_name_and_version=(
                    f'click {importlib.metadata.version("click")}'
                ),
            )
        )
    )
    click.echo()
    features = {
        _types.Feature.CLIPBOARD: (
            cli_helpers.find_clipboard_tool() is not None
        ),
    }
    sections = {
        _msg.Label.SUPPORTED_ENCODING_SCHEMES: [
            str(scheme) for scheme in _types.EncodingScheme
        ],
        _msg.Label.SUPPORTED_FEATURES: [
            str(k) for k, v in features.items() if v
        ],
        _msg.Label.UNAVAILABLE_FEATURES: [
            str(k) for k, v in features.items() if not v
        ],
    }
    for label, items in sections.items():
        if items:
            click.echo(format_version_list(label, items))
    ctx.exit()


version_option = click.option(
    '--version',
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=version_option_callback,
    help=str(_msg.TranslatedString(_msg.Label.VERSION_OPTION_HELP_TEXT)),
)


def standard_logging_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the `--debug`, `-v`/`--verbose` and `-q`/`--quiet` options.

    All three set the level via [`adjust_logging_level`][].

    """
    labels = _msg.Label
    for names, level, label in [
        (('-q', '--quiet'), logging.ERROR, labels.QUIET_OPTION_HELP_TEXT),
        (('-v', '--verbose'), logging.INFO, labels.VERBOSE_OPTION_HELP_TEXT),
        (('--debug',), logging.DEBUG, labels.DEBUG_OPTION_HELP_TEXT),
    ]:
        f = click.option(
            *names,
            'logging_level',
            is_flag=True,
            flag_value=level,
            expose_value=False,
            callback=adjust_logging_level,
            help=str(_msg.TranslatedString(label)),
            cls=LoggingOption,
        )(f)
    return f
