"""Remote release service access."""

from .gateway import (
    NOT_FOUND,
    Found,
    Lookup,
    NotFound,
    ReleaseGateway,
    RemoteError,
    TransportError,
)

__all__ = [
    "NOT_FOUND",
    "Found",
    "Lookup",
    "NotFound",
    "ReleaseGateway",
    "RemoteError",
    "TransportError",
]
