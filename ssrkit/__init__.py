"""HTTP obfuscation plugins, a JSON parser, configuration data and networking helpers for a proxy server."""

__version__ = "0.1.0"