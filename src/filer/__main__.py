"""Allow running filer with ``python -m filer``."""

from .cli.main import cli

if __name__ == "__main__":
    cli()
