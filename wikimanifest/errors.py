"""Exception types raised while turning wiki markup into manifest data."""

from .enums import ErrorKind


class WikiDataError(Exception):
    """A single template node carried data we cannot represent."""
    kind: ErrorKind = ErrorKind.OTHER


class UnsupportedOsError(WikiDataError):
    """The System column named an OS outside the supported set."""
    kind = ErrorKind.UNSUPPORTED_OS


class UnsupportedPathError(WikiDataError):
    """The path used an unsupported {{P|...}} argument or never resolved."""
    kind = ErrorKind.UNSUPPORTED_PATH


class WikiApiError(Exception):
    """The wiki API could not be reached or answered with an error."""


class StoreError(Exception):
    """A persisted YAML file could not be read."""
