# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib
"""Run [`safepwdgen.cli.safepwdgen`][] on import."""

import sys

if __name__ == '__main__':
    from safepwdgen.cli import safepwdgen

    sys.exit(safepwdgen())
