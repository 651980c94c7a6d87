"""Ports: contracts between journeyscope and the host environment."""

from journeyscope.domain.ports.collector import CollectorProtocol
from journeyscope.domain.ports.session import DebugSession, Page

__all__ = [
    "CollectorProtocol",
    "DebugSession",
    "Page",
]
