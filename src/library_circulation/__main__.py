"""Allow ``python -m library_circulation``."""

from .console import app

if __name__ == "__main__":
    app()
