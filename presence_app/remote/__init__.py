"""
Remote authority module.

The authoritative source of status and durations, reached through two
operations: fetch_current and post_transition.
"""
from .base import RemoteAuthority
from .http_authority import HttpRemoteAuthority
from .memory_authority import InMemoryRemoteAuthority

__all__ = ["RemoteAuthority", "HttpRemoteAuthority", "InMemoryRemoteAuthority"]
