# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/__main__.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Allow ``python -m twitch_oauth2``.
"""

# First-Party
from twitch_oauth2.cli import app

if __name__ == "__main__":
    app()
