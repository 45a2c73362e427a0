"""A small proof-of-work blockchain with an SQLite store and a JSON REST API."""

__version__ = "0.1.0"

__all__ = ["blockchain", "cli", "db", "rest", "utils"]