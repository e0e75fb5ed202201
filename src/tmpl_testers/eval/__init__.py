"""Collaborator helpers the testers evaluate through."""

__all__ = [
    "compare",
    "convert",
    "expr",
    "params",
]
