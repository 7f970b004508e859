"""
Presence App - Worker Status and Duration Tracker

Tracks a worker's current activity status (online, on break, offline, ...)
and accumulates per-status elapsed time over a day, reconciling a locally
ticking clock against an authoritative remote source.
"""

__version__ = "0.1.0"
__author__ = "Presence Team"
