"""Unix tools: a command-tree shell executor, WiFi packet statistics and supporting containers."""

__version__ = "0.1.0"