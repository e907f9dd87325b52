"""Allow running as `python -m release_bump`."""

from release_bump.cli.app import app

if __name__ == "__main__":
    app()
