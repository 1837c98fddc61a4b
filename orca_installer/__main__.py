"""Allow ``python -m orca_installer``."""

from orca_installer.main import cli

if __name__ == "__main__":
    cli()
