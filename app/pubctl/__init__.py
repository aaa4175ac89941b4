"""pubctl - publish package releases and documentation to a registry."""

__version__ = "0.1.0"
