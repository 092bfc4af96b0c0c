"""Entry point for running Folio as a module.

Usage:
    python -m folio [command] [options]

Example:
    python -m folio build --source site/ --output _site
    python -m folio validate templates/page.html
"""

from folio.cli import app

if __name__ == "__main__":
    app()
