"""Default configuration parameters for the presence tracker."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TimingParams:
    """Local tick and authoritative resync cadence."""
    tick_interval_seconds: float = 1.0               # Speculative accrual step
    resync_interval_seconds: float = 30.0            # Full authoritative refresh


@dataclass(frozen=True)
class ThresholdParams:
    """Per-status soft limits used for display emphasis."""
    break_seconds: int = 1200                        # 20 min
    lunch_time_seconds: int = 2400                   # 40 min
    offline_seconds: int = 57600                     # 16 h


@dataclass(frozen=True)
class RemoteParams:
    """Remote authority HTTP endpoint parameters."""
    base_url: Optional[str] = None
    current_path: str = "/attendance/current"
    transition_path: str = "/attendance/status"
    timeout_seconds: int = 10
    auth_token: Optional[str] = None


@dataclass(frozen=True)
class MessageParams:
    """User-facing messages."""
    transition_failed: str = "Failed to change status"
    evaluation_prompt: str = "Requesting 'Evaluation'. Proceed?"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    timing: TimingParams
    thresholds: ThresholdParams
    remote: RemoteParams
    messages: MessageParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        timing=TimingParams(),
        thresholds=ThresholdParams(),
        remote=RemoteParams(),
        messages=MessageParams(),
    )
