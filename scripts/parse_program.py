#!/usr/bin/env python3
"""Parse one or more BL program files and print a summary of each."""

from __future__ import annotations

import sys

from blparse.frontend import cli

if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(cli.main())
