"""
Tiny leaky bucket for anomaly detection in a single process.

Report every fault of an unreliable operation (a flaky bus transaction, a
failed RPC, a rejected login) with one call to ``drip_in``. The bucket
drains at a fixed rate between calls and reports overflow when faults
arrive faster than it drains. There are no timers, threads or callbacks:
the state is the ``Bucket`` value the caller holds.

- bucket: the ``Bucket`` value and its transitions
- clock: monotonic millisecond time sources
- config: default tuning via pydantic-settings
- errors: exception types
- logging: structured logging setup
"""

from lx_bucket.bucket import (
    Bucket,
    Verdict,
    drip_in,
    drip_in_or_fail,
    new_bucket,
    new_bucket_from_settings,
    renew_bucket,
)
from lx_bucket.clock import Clock, ManualClock, monotonic_ms
from lx_bucket.errors import BucketOverflowError, InvalidParameterError, LxBucketException

__version__ = "0.1.0"

__all__ = [
    "Bucket",
    "BucketOverflowError",
    "Clock",
    "InvalidParameterError",
    "LxBucketException",
    "ManualClock",
    "Verdict",
    "drip_in",
    "drip_in_or_fail",
    "monotonic_ms",
    "new_bucket",
    "new_bucket_from_settings",
    "renew_bucket",
]
