"""
Firebird platform, the open source descendant of Interbase.
"""

from .interbase import InterbasePlatform


class FirebirdPlatform(InterbasePlatform):
    NAME = "Firebird"
    URL_SCHEMES = ("firebirdsql", "firebird")
