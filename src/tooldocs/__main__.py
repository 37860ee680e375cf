# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Module entry point for ``python -m tooldocs``."""

from __future__ import annotations

from .cli.app import main

if __name__ == "__main__":  # pragma: no cover - exercised via console script
    main()
