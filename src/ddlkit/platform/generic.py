"""
Generic ANSI SQL platform.
"""

from .base import Platform


class GenericPlatform(Platform):
    """Renders plain ANSI SQL with the default capabilities."""

    NAME = "Generic"
    URL_SCHEMES = ("generic",)
