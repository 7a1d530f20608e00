"""
Leaky bucket state machine.

A bucket is an immutable value. Each call to :func:`drip_in` registers one
event, returns a verdict and a new bucket, and leaves the old one alone.
Callers rebind their reference to the returned bucket:

    verdict, bucket = drip_in(bucket)
    if verdict is Verdict.OVERFLOW:
        ...

Decay is reconstructed from the bucket's clock at each call, so there are
no timers and nothing runs between calls.
"""

import math
import numbers
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from lx_bucket.clock import Clock, monotonic_ms
from lx_bucket.config import BucketSettings, get_settings
from lx_bucket.errors import BucketOverflowError, InvalidParameterError
from lx_bucket.logging import get_logger


logger = get_logger("lx_bucket.bucket")

DEFAULT_CAPACITY = 10.0
DEFAULT_LEAK_RATE = 1.0

# Volume added by one drip; also the floor of the post-drip level.
DRIP_VOLUME = 1.0


class Verdict(str, Enum):
    """Outcome of a drip."""
    OK = "ok"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class Bucket:
    """Leaky bucket snapshot.

    ``level`` is only correct at ``last_drip_time``, a reading of ``clock``
    in milliseconds. Build buckets with :func:`new_bucket` or
    :func:`renew_bucket`; direct construction validates the tuning too.
    """
    capacity: float
    leak_rate: float
    level: float = 0.0
    last_drip_time: int = 0
    clock: Clock = field(default=monotonic_ms, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "capacity", _positive_finite("capacity", self.capacity))
        object.__setattr__(self, "leak_rate", _positive_finite("leak_rate", self.leak_rate))

    @property
    def overflowing(self) -> bool:
        """Whether the level was above capacity at the last drip."""
        return self.level > self.capacity

    def get_state(self) -> Dict[str, Any]:
        """Get the numeric state of the bucket."""
        return {
            "level": self.level,
            "capacity": self.capacity,
            "leak_rate": self.leak_rate,
            "last_drip_time": self.last_drip_time
        }


def _positive_finite(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        logger.warning("Rejected bucket parameter", parameter=name, value=repr(value))
        raise InvalidParameterError(name, value, f"{name} must be a real number")

    try:
        number = float(value)
    except OverflowError:
        logger.warning("Rejected bucket parameter", parameter=name, value=repr(value))
        raise InvalidParameterError(name, value) from None
    if not math.isfinite(number) or number <= 0:
        logger.warning("Rejected bucket parameter", parameter=name, value=repr(value))
        raise InvalidParameterError(name, value)

    return number


def new_bucket(capacity: float = DEFAULT_CAPACITY,
               leak_rate: float = DEFAULT_LEAK_RATE,
               clock: Optional[Clock] = None) -> Bucket:
    """Create an empty bucket.

    Args:
        capacity: Level above which a drip is reported as overflow.
        leak_rate: Units drained per second.
        clock: Millisecond monotonic time source; defaults to the process
            monotonic clock.

    Raises:
        InvalidParameterError: If either parameter is not a finite number
            greater than zero.
    """
    capacity = _positive_finite("capacity", capacity)
    leak_rate = _positive_finite("leak_rate", leak_rate)
    clock = clock or monotonic_ms

    bucket = Bucket(capacity=capacity, leak_rate=leak_rate, level=0.0,
                    last_drip_time=clock(), clock=clock)
    logger.debug("Created bucket", capacity=capacity, leak_rate=leak_rate)
    return bucket


def renew_bucket(prior: Bucket, clock: Optional[Clock] = None) -> Bucket:
    """Create an empty bucket with the same tuning as ``prior``.

    ``prior`` is not modified, so it can still be inspected afterwards.
    The prior bucket's clock is reused unless ``clock`` is given.
    """
    capacity = _positive_finite("capacity", prior.capacity)
    leak_rate = _positive_finite("leak_rate", prior.leak_rate)
    clock = clock or prior.clock

    bucket = Bucket(capacity=capacity, leak_rate=leak_rate, level=0.0,
                    last_drip_time=clock(), clock=clock)
    logger.debug("Renewed bucket", capacity=capacity, leak_rate=leak_rate, prior_level=prior.level)
    return bucket


def new_bucket_from_settings(settings: Optional[BucketSettings] = None,
                             clock: Optional[Clock] = None) -> Bucket:
    """Create an empty bucket tuned from settings (environment by default)."""
    settings = settings or get_settings()
    return new_bucket(settings.capacity, settings.leak_rate, clock=clock)


def drip_in(bucket: Bucket) -> Tuple[Verdict, Bucket]:
    """Register one event against ``bucket``.

    The level first drains by the time elapsed since the last drip times
    the leak rate, then gains one unit. The result never drops below one
    unit. A clock reading earlier than the last drip counts as no elapsed
    time.

    Returns:
        The verdict and the new bucket. ``Verdict.OVERFLOW`` when the new
        level exceeds capacity.
    """
    now = bucket.clock()
    interval = max(now - bucket.last_drip_time, 0)
    drain_amount = interval / 1000.0 * bucket.leak_rate
    new_level = max(bucket.level - drain_amount + DRIP_VOLUME, DRIP_VOLUME)

    new_bucket = replace(bucket, level=new_level, last_drip_time=now)
    verdict = Verdict.OK if new_level <= bucket.capacity else Verdict.OVERFLOW
    return verdict, new_bucket


def drip_in_or_fail(bucket: Bucket) -> Bucket:
    """Like :func:`drip_in`, but raise on overflow.

    Raises:
        BucketOverflowError: If the drip overflows. The new bucket is
            available as ``error.bucket``.
    """
    verdict, new_bucket = drip_in(bucket)
    if verdict is Verdict.OVERFLOW:
        logger.warning("Bucket overflow", bucket=new_bucket.get_state())
        raise BucketOverflowError(new_bucket)
    return new_bucket
