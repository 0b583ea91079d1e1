"""Allow ``python -m fitsm.cli``."""

from fitsm.cli.app import app

app()
