"""Interactive shell for a search engine's HTTP API."""

from esrepl.config import Config, VerbCase
from esrepl.repl import Repl

__version__ = "0.1.0"

__all__ = ["Config", "Repl", "VerbCase", "__version__"]
