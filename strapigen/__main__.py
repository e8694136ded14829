# File: strapigen/__main__.py
"""
StrapiGen - Module entry point.

Allows running the generator directly via::

    python -m strapigen
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from strapigen.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
