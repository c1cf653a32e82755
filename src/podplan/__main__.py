"""Allow ``python -m podplan``."""

from podplan.cli.app import app

if __name__ == "__main__":
    app()
