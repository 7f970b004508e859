"""
Synchronization module.

Local one-second ticking and authoritative fetch / resync / transition
requests against the remote authority.
"""
