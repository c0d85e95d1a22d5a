"""Allow `python -m scriptkit <command> ...`."""

from scriptkit.cli.main import cli

if __name__ == "__main__":
    cli()
