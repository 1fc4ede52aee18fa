# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""safepwdgen internals.

Warning:
    Non-public package (implementation detail), provided for didactical
    and educational purposes only. Subject to change without notice,
    including removal.

"""

import safepwdgen

__all__ = ()

PROG_NAME = safepwdgen.__distribution_name__
VERSION = safepwdgen.__version__
