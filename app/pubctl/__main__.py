"""Allow running pubctl as ``python -m pubctl``."""

from pubctl.cli.main import app

app(prog_name="pubctl")
