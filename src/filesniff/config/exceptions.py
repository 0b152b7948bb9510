"""Errors raised while reading or resolving filesniff configuration."""


class ConfigError(Exception):
    """Raised when the config file, an environment override, or a CLI override is invalid."""
