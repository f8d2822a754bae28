"""Banana Studio CLI — Command Line Interface.

Functions:
    main: Точка входа CLI.

Example:
    $ banana --help
    $ banana prompt multi-view -s viewType=free-view -s angle=90
    $ banana key check ABCD-1234-EFGH
    $ banana generate product.jpg --mode wireframe --key ABCD-1234-EFGH
"""

from banana_studio.cli.app import app


def main() -> None:
    """Точка входа для CLI."""
    app()


__all__ = ["main", "app"]
