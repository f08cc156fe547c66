"""Package entrypoint for the personal site.

Exposes the Flask app factory and a ready-to-run instance for CLI/WSGI use.
"""

import os

from .config import load_user_config
from .website import create_app

# Create a default app instance so `flask --app node_it run` works out-of-the-box.
app = create_app(user_config=load_user_config(os.environ))

# Re-export public symbols for importers.
__all__ = ["app", "create_app"]
