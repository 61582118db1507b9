"""Allow ``python -m filedb``."""

from filedb.cli.main import app

app(prog_name="filedb")
