"""Poker league tracking: a JSON-file store, blind alerts, a terminal game and a web server."""

__version__ = "0.1.0"