"""Entry point for ``python -m hashbrowns``."""

from hashbrowns.cli import cli

if __name__ == "__main__":
    cli()
