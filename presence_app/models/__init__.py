"""
Data models module.

Status and role enumerations, authoritative snapshots and transition results.
"""
