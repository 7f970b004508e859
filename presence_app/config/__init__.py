"""
Configuration module.

Frozen dataclass defaults, YAML loading with three-tier precedence and
parameter validation.
"""
