"""
errors.py

Exceptions raised by the generation engine. Everything here derives from
ValueError so callers that already guard worksheet inputs with
`except ValueError` keep working.
"""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """A generation request (or a sampling range inside it) cannot be honored."""
