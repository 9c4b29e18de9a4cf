"""Build a game save/config manifest from PCGamingWiki template data."""

__version__ = "0.1.0"
