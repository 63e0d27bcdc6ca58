"""
ELD Logs Services Package.

This package contains the Electronic Logging Device collaborators that
produce the duty status events evaluated by the HOS engine.

Services:
- EldProvider / InMemoryEldProvider: Duty status event sourcing
- TimeSource / SystemClock / VirtualClock: Evaluation time
"""

from .time_source import SystemClock, TimeSource, VirtualClock
from .eld_provider import (
    ELDProviderError,
    EldProvider,
    InMemoryEldProvider,
    get_eld_provider,
)

__all__ = [
    'TimeSource',
    'SystemClock',
    'VirtualClock',
    'EldProvider',
    'InMemoryEldProvider',
    'ELDProviderError',
    'get_eld_provider',
]
