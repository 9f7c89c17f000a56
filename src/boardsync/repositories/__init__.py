"""Persistence gateways."""

from .filesystem import FilesystemGateway
from .memory import MemoryGateway
from .protocol import GatewayProtocol

__all__ = [
    "FilesystemGateway",
    "GatewayProtocol",
    "MemoryGateway",
]
