"""Errors raised while turning an endpoint into an executable request."""


class RequestError(ValueError):
    """Base class for every binding failure."""


class InvalidUrlError(RequestError):
    """The URL is empty, relative, or cannot be parsed."""


class UnsupportedMethodError(RequestError):
    """The method is not one of the supported HTTP verbs."""


class InvalidHeaderError(RequestError):
    """A header name or value cannot be emitted safely."""
