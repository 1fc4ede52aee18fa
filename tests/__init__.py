# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

from __future__ import annotations

import contextlib
import logging
import os
import pathlib
import string
from typing import TYPE_CHECKING, NamedTuple

import click.testing
from typing_extensions import Any

from safepwdgen import cli
from safepwdgen._internals import cli_helpers, cli_machinery

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    import pytest
    from typing_extensions import Self

__all__ = ()

DUMMY_SERVICE = 'example.com'
DUMMY_PASSPHRASE = 'correct horse'
"""The seed password used throughout the test suite."""
DUMMY_PROMPTED_PASSPHRASE = 'battery staple'
"""The seed password "typed in" at the interactive prompt."""

EMPTY_DIGEST_B64 = '47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU='
"""The base64 encoding of the SHA-256 digest of the empty string."""

BASE71_SYMBOLS = (
    '!-_?=@/+*'
    + string.digits
    + string.ascii_uppercase
    + string.ascii_lowercase
)
BASE64_SYMBOLS = (
    string.ascii_uppercase + string.ascii_lowercase + string.digits + '+/='
)


def radix_encode_reference(digest: bytes, symbols: str) -> str:
    """Encode a digest in base `len(symbols)`, the slow and obvious way."""
    number = int(digest.hex() or '0', 16)
    digits: list[str] = []
    while True:
        number, digit = divmod(number, len(symbols))
        digits.append(symbols[digit])
        if not number:
            break
    return ''.join(reversed(digits))


def auto_prompt(*args: Any, **kwargs: Any) -> str:
    del args, kwargs  # Unused.
    return DUMMY_PROMPTED_PASSPHRASE


class ClipboardRecorder:
    """A stand-in for the system clipboard.

    Records every text "copied", and optionally fails instead.

    """

    def __init__(self, *, error: BaseException | None = None) -> None:
        self.copied: list[str] = []
        self.error = error

    def __call__(self, text: str, /) -> str:
        if self.error is not None:
            raise self.error
        self.copied.append(text)
        return 'test-clipboard'


@contextlib.contextmanager
def isolated_config(
    monkeypatch: pytest.MonkeyPatch,
    runner: CliRunner,
) -> Iterator[None]:
    prog_name = cli.PROG_NAME
    env_name = prog_name.replace(' ', '_').upper() + '_PATH'
    with runner.isolated_filesystem():
        monkeypatch.setenv('HOME', os.getcwd())
        monkeypatch.setenv('USERPROFILE', os.getcwd())
        monkeypatch.delenv(env_name, raising=False)
        config_dir = cli_helpers.config_filename(subsystem=None)
        os.makedirs(config_dir, exist_ok=True)
        yield


@contextlib.contextmanager
def isolated_user_config(
    monkeypatch: pytest.MonkeyPatch,
    runner: CliRunner,
    user_config: str,
) -> Iterator[None]:
    """Provide an isolated configuration with the given TOML contents."""
    with isolated_config(monkeypatch, runner):
        pathlib.Path(
            cli_helpers.config_filename(subsystem='user configuration')
        ).write_text(user_config, encoding='UTF-8')
        yield


class ReadableResult(NamedTuple):
    """Helper class for formatting and testing click.testing.Result objects."""

    exception: BaseException | None
    exit_code: int
    stdout: str
    stderr: str

    @classmethod
    def parse(cls, r: click.testing.Result, /) -> Self:
        return cls(r.exception, r.exit_code, r.stdout or '', r.stderr or '')

    def clean_exit(
        self, *, output: str = '', empty_stderr: bool = False
    ) -> bool:
        """Return whether the invocation exited cleanly.

        Args:
            output:
                An expected output string.
            empty_stderr:
                Whether standard error must be empty.

        """
        return (
            (
                not self.exception
                or (
                    isinstance(self.exception, SystemExit)
                    and self.exit_code == 0
                )
            )
            and (not output or output in self.stdout)
            and (not empty_stderr or not self.stderr)
        )

    def error_exit(
        self,
        *,
        error: str | type[BaseException] = BaseException,
        exit_code: int | None = None,
    ) -> bool:
        """Return whether the invocation exited uncleanly.

        Args:
            error:
                An expected error message, or an expected exception
                type.
            exit_code:
                An expected exit status, if any.

        """
        if exit_code is not None and self.exit_code != exit_code:
            return False
        if isinstance(error, str):
            return (
                isinstance(self.exception, SystemExit)
                and self.exit_code > 0
                and (not error or error in self.stderr)
            )
        else:  # noqa: RET505
            return isinstance(self.exception, error)


class CliRunner:
    """A [`click.testing.CliRunner`][] with standard CLI logging.

    Sets up the same logging handlers as a "real" command-line call
    would, and returns [`ReadableResult`][] objects.

    """

    def __init__(self) -> None:
        self.click_testing_clirunner = click.testing.CliRunner()

    def invoke(
        self,
        cli: click.Command,
        args: Sequence[str] | str | None = None,
        input: str | bytes | None = None,  # noqa: A002
        env: Mapping[str, str | None] | None = None,
        *,
        catch_exceptions: bool = True,
        color: bool = False,
        **extra: Any,
    ) -> ReadableResult:
        with cli_machinery.standard_logging():
            return ReadableResult.parse(
                self.click_testing_clirunner.invoke(
                    cli,
                    args=args,
                    input=input,
                    env=env,
                    catch_exceptions=catch_exceptions,
                    color=color,
                    **extra,
                )
            )

    def isolated_filesystem(
        self,
        temp_dir: str | os.PathLike[str] | None = None,
    ) -> contextlib.AbstractContextManager[str]:
        return self.click_testing_clirunner.isolated_filesystem(
            temp_dir=temp_dir
        )


def warning_emitted(
    message: str,
    record_tuples: Sequence[tuple[str, int, str]],
) -> bool:
    """Return true if some warning log record contains `message`."""
    return any(
        name == cli.PROG_NAME and level == logging.WARNING and message in text
        for name, level, text in record_tuples
    )


def error_emitted(
    message: str,
    record_tuples: Sequence[tuple[str, int, str]],
) -> bool:
    """Return true if some error log record contains `message`."""
    return any(
        name == cli.PROG_NAME and level == logging.ERROR and message in text
        for name, level, text in record_tuples
    )
