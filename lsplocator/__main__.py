"""Module entrypoint for running lsplocator as ``python -m lsplocator``."""

from __future__ import annotations

from lsplocator.cli import main


if __name__ == "__main__":
    main()
