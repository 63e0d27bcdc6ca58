"""
HOS engine configuration.

Builds HosConfig from the HOS_ENGINE Django setting so callers do not
hard-code cycle limits or warning thresholds.
"""

from typing import Dict, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .domain import HosConfig

DEFAULTS = {
    "WARNING_THRESHOLD_MIN": 60,
    "RULESET": "FMCSA",
    "CYCLE_LIMIT_MIN": 70 * 60,
    "CYCLE_DAYS": 8,
    "TIMEZONE": "UTC",
    "ELD_MODE": "mock",
}

ELD_MODES = ("mock",)


def get_hos_settings() -> Dict:
    """Return HOS_ENGINE settings merged over the defaults."""
    return {**DEFAULTS, **getattr(settings, "HOS_ENGINE", {})}


def get_hos_config(overrides: Optional[Dict] = None) -> HosConfig:
    """
    Build the HOS configuration for this deployment.

    Args:
        overrides: Optional HosConfig field values taking precedence over
            settings (e.g. from an API request)
    """
    hos_settings = get_hos_settings()
    values = {
        "warning_threshold_min": hos_settings["WARNING_THRESHOLD_MIN"],
        "ruleset": hos_settings["RULESET"],
        "cycle_limit_min": hos_settings["CYCLE_LIMIT_MIN"],
        "cycle_days": hos_settings["CYCLE_DAYS"],
        "timezone": hos_settings["TIMEZONE"],
    }
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})
    return HosConfig(**values)


def get_eld_mode() -> str:
    mode = str(get_hos_settings()["ELD_MODE"]).strip().lower()
    if mode not in ELD_MODES:
        raise ImproperlyConfigured(f"Unsupported HOS_ENGINE ELD_MODE: {mode}")
    return mode
