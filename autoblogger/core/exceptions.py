# /autoblogger/core/exceptions.py

"""
The error taxonomy shared by every layer of the autoblogger.

Only ConfigError is allowed to escape to the top of the process (it aborts
startup). Everything else is raised by a collaborator and recovered by the
article service, because no single request may take the server down.
"""


class AutobloggerError(Exception):
    """Base class for every error raised by this application."""


class ConfigError(AutobloggerError):
    """The process configuration is missing or invalid."""


class StoreFailure(AutobloggerError):
    """A read or write against the content store failed (connection, SQL)."""


class DuplicateKeyError(StoreFailure):
    """An article with the same slug already exists."""

    def __init__(self, slug: str):
        super().__init__(f"An article with slug '{slug}' already exists.")
        self.slug = slug


class GenerationFailure(AutobloggerError):
    """The text-generation provider was unreachable or answered badly."""
