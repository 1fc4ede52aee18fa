# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING

import hypothesis
import pytest

import tests
from safepwdgen._internals import cli_helpers, cli_machinery

if TYPE_CHECKING:
    from collections.abc import Iterator

# https://hypothesis.readthedocs.io/en/latest/settings.html#settings-profiles
hypothesis.settings.register_profile('ci', max_examples=1000)
hypothesis.settings.register_profile('dev', max_examples=10)
hypothesis.settings.register_profile(
    'debug', max_examples=10, verbosity=hypothesis.Verbosity.verbose
)
hypothesis.settings.register_profile(
    'flaky', deadline=datetime.timedelta(milliseconds=150)
)


# https://docs.pytest.org/en/stable/explanation/fixtures.html#a-note-about-fixture-cleanup
# https://github.com/pytest-dev/pytest/issues/5243#issuecomment-491522595
@pytest.fixture(scope='session', autouse=True)
def term_handler() -> Iterator[None]:  # pragma: no cover
    try:
        import signal  # noqa: PLC0415

        sigint_handler = signal.getsignal(signal.SIGINT)
    except (ImportError, OSError):
        return
    else:
        orig_term = signal.signal(signal.SIGTERM, sigint_handler)
        yield
        signal.signal(signal.SIGTERM, orig_term)


@pytest.fixture(autouse=True)
def standard_logging_levels() -> Iterator[None]:
    """Reset the CLI logging levels after each test.

    The `-v`, `-q` and `--debug` options change the levels of shared
    handler and logger objects.

    """
    handler = cli_machinery.CLI_HANDLER
    logger = logging.getLogger(cli_machinery.PACKAGE_NAME)
    old_handler_level = handler.level
    old_logger_level = logger.level
    yield
    handler.setLevel(old_handler_level)
    logger.setLevel(old_logger_level)


@pytest.fixture(autouse=True)
def clipboard(monkeypatch: pytest.MonkeyPatch) -> tests.ClipboardRecorder:
    """Replace the system clipboard with a recorder.

    Tests never touch the real clipboard.  Tests wishing to simulate
    clipboard failures may set the recorder's `error` attribute.

    """
    recorder = tests.ClipboardRecorder()
    monkeypatch.setattr(cli_helpers, 'copy_to_clipboard', recorder)
    return recorder
