"""Test configuration and fixtures for the Book Store API."""

import os

# Importing the app module builds the default app; keep it off the log file.
os.environ.setdefault("LOG_FILE", "")

from tests.fixtures import *  # noqa: E402,F401,F403
