"""
HTTP and WebSocket surface for ReliefHub.
"""

from .app import create_app
from .broadcast import Broadcaster

__all__ = ["create_app", "Broadcaster"]
