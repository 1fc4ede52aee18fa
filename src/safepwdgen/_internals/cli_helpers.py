# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Helper functions for the safepwdgen command-line.

Warning:
    Non-public module (implementation detail), provided for didactical and
    educational purposes only. Subject to change without notice, including
    removal.

"""

from __future__ import annotations

import logging
import os
import pathlib
import shutil
import subprocess
import sys
import unicodedata
from typing import TYPE_CHECKING, NamedTuple, cast

import click

import safepwdgen as spg
from safepwdgen import _types
from safepwdgen._internals import cli_messages as _msg

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

if TYPE_CHECKING:
    from typing_extensions import Any

__author__ = spg.__author__
__version__ = spg.__version__

PROG_NAME = _msg.PROG_NAME
CLIPBOARD_TIMEOUT = 10


# Configuration
# =============

config_filename_table = {
    None: '.',
    'user configuration': 'config.toml',
}


def config_filename(
    subsystem: str | None = 'user configuration',
) -> pathlib.Path:
    """Return the filename of the configuration file for the subsystem.

    The file is located within the configuration directory as
    determined by the `SAFEPWDGEN_PATH` environment variable, or by
    [`click.get_app_dir`][] in POSIX mode.

    Args:
        subsystem:
            Name of the configuration subsystem whose configuration
            filename to return.  If `None`, return the configuration
            directory instead.

    Raises:
        AssertionError:
            An unknown subsystem was passed.

    """
    path = pathlib.Path(
        os.getenv(PROG_NAME.upper() + '_PATH')
        or click.get_app_dir(PROG_NAME, force_posix=True)
    )
    try:
        filename = config_filename_table[subsystem]
    except (KeyError, TypeError):  # pragma: no cover
        msg = f'Unknown configuration subsystem: {subsystem!r}'
        raise AssertionError(msg) from None
    return path / filename


def load_user_config() -> dict[str, Any]:
    """Load the user config from the application directory.

    The filename is obtained via [`config_filename`][].

    Returns:
        The user configuration, as a nested `dict`.

    Raises:
        OSError:
            There was an OS error accessing the file.
        ValueError:
            The data loaded from the file is not a valid TOML file.

    """
    filename = config_filename(subsystem='user configuration')
    with filename.open('rb') as fileobj:
        return tomllib.load(fileobj)


# Interactive input and input vetting
# ===================================


def prompt_for_passphrase() -> str:
    """Interactively prompt for the seed password.

    Calls [`click.prompt`][] internally.  Moved into a separate function
    mainly for testing/mocking purposes.

    Returns:
        The user input.

    """
    return cast(
        'str',
        click.prompt(
            str(_msg.TranslatedString(_msg.Label.SEED_PASSWORD_PROMPT_TEXT)),
            default='',
            hide_input=True,
            show_default=False,
            err=True,
        ),
    )


def check_for_misleading_text(
    what: _msg.Label,
    text: str,
    /,
    *,
    form: str = 'NFC',
    ctx: click.Context | None = None,
) -> bool:
    """Check if a text input is not normalized, and warn if so.

    The UTF-8 serialization, not the glyphs, determines the derived
    password.  A text that is not in the expected Unicode normalization
    form may thus yield a different password than one that displays
    identically.

    Args:
        what:
            A label describing the text, e.g.
            [`Label.SEED_PASSWORD_DESCRIPTION`][_msg.Label].
        text:
            The text to vet.
        form:
            The expected Unicode normalization form.
        ctx:
            The click context.  This is necessary to pass output options
            set on the context to the logging machinery.

    Returns:
        True if the text was found to be misleading (and a warning was
        issued), false otherwise.

    Raises:
        AssertionError:
            The normalization form is invalid.

    """
    if form not in _types.NORMALIZATION_FORMS:
        msg = f'Invalid Unicode normalization form: {form!r}'
        raise AssertionError(msg)
    if unicodedata.is_normalized(form, text):
        return False
    logger = logging.getLogger(PROG_NAME)
    logger.warning(
        _msg.TranslatedString(
            _msg.WarnMsgTemplate.TEXT_NOT_NORMALIZED,
            what=_msg.TranslatedString(what),
            form=form,
        ),
        stacklevel=2,
        extra={'color': ctx.color if ctx is not None else None},
    )
    return True


# Clipboard
# =========


class ClipboardTool(NamedTuple):
    """An external program that copies its standard input to the clipboard.

    Attributes:
        name:
            A short name, for diagnostics.
        argv:
            The command-line to run.
        env_var:
            An environment variable that must be set (and non-empty)
            for this tool to be usable, e.g. the display name of the
            window system.  If `None`, no such requirement exists.

    """

    name: str
    """"""
    argv: tuple[str, ...]
    """"""
    env_var: str | None = None
    """"""


CLIPBOARD_TOOLS: tuple[ClipboardTool, ...] = (
    ClipboardTool('pbcopy', ('pbcopy',)),
    ClipboardTool('clip', ('clip',)),
    ClipboardTool('wl-copy', ('wl-copy',), 'WAYLAND_DISPLAY'),
    ClipboardTool('xclip', ('xclip', '-selection', 'clipboard'), 'DISPLAY'),
    ClipboardTool('xsel', ('xsel', '--clipboard', '--input'), 'DISPLAY'),
)
"""Known clipboard tools, in order of preference."""


class ClipboardUnavailableError(RuntimeError):
    """No usable clipboard tool was found on this system."""


def find_clipboard_tool() -> ClipboardTool | None:
    """Return the first usable clipboard tool, or `None`.

    A tool is usable if its executable is on `PATH`, and if its
    required environment variable, if any, is set.  The returned tool's
    command-line refers to the executable by its full path.

    """
    for tool in CLIPBOARD_TOOLS:
        if tool.env_var is not None and not os.environ.get(tool.env_var):
            continue
        executable = shutil.which(tool.argv[0])
        if executable is not None:
            return tool._replace(argv=(executable, *tool.argv[1:]))
    return None


def copy_to_clipboard(text: str, /) -> str:
    """Copy `text` to the system clipboard.

    Args:
        text: The text to copy.

    Returns:
        The name of the clipboard tool used.

    Raises:
        ClipboardUnavailableError:
            No usable clipboard tool was found.
        OSError:
            The clipboard tool could not be run.
        subprocess.CalledProcessError:
            The clipboard tool failed.
        subprocess.TimeoutExpired:
            The clipboard tool did not finish in time.

    """
    tool = find_clipboard_tool()
    if tool is None:
        msg = 'no clipboard tool found'
        raise ClipboardUnavailableError(msg)
    subprocess.run(  # noqa: S603
        tool.argv,
        input=text,
        text=True,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        timeout=CLIPBOARD_TIMEOUT,
    )
    return tool.name
