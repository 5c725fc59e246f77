"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    DOCCHECK_DOC_FILE     — Documentation file validated against the project (default: CLAUDE.md)
    DOCCHECK_PROJECT_PATH — Project root served by the HTTP API (default: current directory)
    DOCCHECK_CONFIG_DIR   — Directory holding the profiles config.json (default: ~/.doccheck)
    DOCCHECK_WEB_DIR      — Built web app directory to serve as static assets (optional)
    DOCCHECK_HOST         — Bind address for `doccheck serve` (default: 127.0.0.1)
    DOCCHECK_PORT         — Port for `doccheck serve` (default: 3001)
    DOCCHECK_LOG_LEVEL    — Root log level (default: INFO)
    DOCCHECK_LOG_DIR      — Enables a dated log file in this directory (optional)

Path settings are exposed as accessor functions rather than constants: the
CLI changes the project root per invocation and tests point the config store
at temporary directories, so these are read from the environment on each call.
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DOC_FILENAME = os.getenv("DOCCHECK_DOC_FILE", "CLAUDE.md")
README_FILENAME = "README.md"
CONFIG_FILENAME = "config.json"

DEFAULT_HOST = os.getenv("DOCCHECK_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("DOCCHECK_PORT", 3001))

LOG_LEVEL = os.getenv("DOCCHECK_LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("DOCCHECK_LOG_DIR") or None

# Number of dependencies listed per group in a generated skeleton
MAX_LISTED_DEPENDENCIES = 10


def get_project_root() -> str:
    """Absolute path of the project the HTTP API operates on."""
    return os.path.abspath(os.getenv("DOCCHECK_PROJECT_PATH") or os.getcwd())


def get_config_dir() -> str:
    """Directory of the profiles store (created lazily on first save)."""
    configured = os.getenv("DOCCHECK_CONFIG_DIR")
    if configured:
        return os.path.abspath(configured)
    return os.path.join(os.path.expanduser("~"), ".doccheck")


def get_config_path() -> str:
    return os.path.join(get_config_dir(), CONFIG_FILENAME)


def get_web_dir() -> Optional[str]:
    """Built web app directory, or None when static serving is disabled."""
    web_dir = os.getenv("DOCCHECK_WEB_DIR")
    if web_dir and os.path.isdir(web_dir):
        return os.path.abspath(web_dir)
    return None
