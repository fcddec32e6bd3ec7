"""Exporter interface — one concrete export format per implementation."""

from abc import ABC, abstractmethod

from request_export.entities.base import EndpointData


class Exporter(ABC):
    """Renders an endpoint as external text.

    Implementations bind the endpoint first and let binding errors
    propagate; they never substitute a default request.
    """

    name: str = ""

    @abstractmethod
    def generate(self, endpoint: EndpointData) -> str:
        """Return the exported text for the endpoint."""


def shell_quote(text: str) -> str:
    """Make text safe inside a single-quoted POSIX shell string."""
    return text.replace("'", "'\\''")
