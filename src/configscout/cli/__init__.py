"""CLI for configscout."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from configscout.cli.commands import places as _places_module  # noqa: F401
from configscout.cli.commands import search as _search_module  # noqa: F401
from configscout.cli.main import app, main


__all__ = ["app", "main"]
