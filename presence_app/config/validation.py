"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_timing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate tick and resync intervals."""
        errors = []

        for name in ("tick_interval_seconds", "resync_interval_seconds"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_threshold_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate soft limits."""
        errors = []

        for name in ("break_seconds", "lunch_time_seconds", "offline_seconds"):
            if name in params:
                value = params[name]
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_remote_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate remote authority endpoint parameters."""
        errors = []

        base_url = params.get("base_url")
        if base_url is not None:
            parsed = urlparse(base_url) if isinstance(base_url, str) else None
            if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(ValidationError(
                    field="base_url",
                    message="Must be an http(s) URL",
                    value=base_url
                ))

        for name in ("current_path", "transition_path"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value.startswith("/"):
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a path starting with '/'",
                        value=value
                    ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "timing" in config:
            errors.extend(ConfigValidator.validate_timing_params(config["timing"]))

        if "thresholds" in config:
            errors.extend(ConfigValidator.validate_threshold_params(config["thresholds"]))

        if "remote" in config:
            errors.extend(ConfigValidator.validate_remote_params(config["remote"]))

        return errors
