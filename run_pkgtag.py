#!/usr/bin/env python
"""
Thin wrapper script to invoke the pkgtag CLI from a source checkout.

Running ``python run_pkgtag.py`` is equivalent to running the
``pkgtag`` console script installed via ``pyproject.toml``.
"""

from pkgtag.cli import main


if __name__ == "__main__":
    main(prog_name="pkgtag")
