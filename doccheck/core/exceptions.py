"""
Exceptions
==========
Domain exception hierarchy.

Inner layers raise these; the CLI commands and the HTTP exception handlers
in main.py translate them into exit codes and status codes.
"""


class DocCheckError(Exception):
    """Base exception for the entire application."""


class ProjectPathError(DocCheckError):
    """A project root or documentation file does not exist or cannot be read."""


class ConfigError(DocCheckError):
    """A configuration payload could not be parsed or validated."""
