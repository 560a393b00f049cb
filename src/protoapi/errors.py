from __future__ import annotations


class ProtoapiError(Exception):
    """Base class for every error that aborts a generation run."""


class ConfigError(ProtoapiError):
    """The option string cannot be interpreted."""


class SchemaError(ProtoapiError):
    """The descriptor input cannot be interpreted."""


class OutputError(ProtoapiError):
    """A target directory or generated file cannot be prepared or written."""
