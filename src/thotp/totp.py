import datetime
import logging
import time
from typing import Any, Optional, Tuple, Union

from . import utils
from .digests import Digest, resolve_digest
from .errors import ClockError
from .otp import DEFAULT_DIGEST, DEFAULT_DIGITS, OTP, _generate

log = logging.getLogger(__name__)

DEFAULT_STEP = 30
DEFAULT_DRIFT = 1

TimeLike = Union[int, float, datetime.datetime]


def now() -> int:
    """
    Returns the current unix time in whole seconds.

    :raises ClockError: if the system clock reports a time before the epoch
    """
    current = time.time()
    if current < 0:
        raise ClockError("system time is before the unix epoch")
    return int(current)


def _unix_time(for_time: Optional[TimeLike]) -> int:
    # 0 and None both mean "now"; this is the only place the clock is read.
    if not for_time:
        return now()
    if isinstance(for_time, datetime.datetime):
        for_time = for_time.timestamp()
    for_time = int(for_time)
    if for_time < 0 or for_time > utils.MAX_COUNTER:
        raise ValueError("timestamp must be in range [0, 2**64 - 1]")
    return for_time


def timecode(for_time: Optional[TimeLike] = 0, step: int = DEFAULT_STEP) -> int:
    """
    Returns the TOTP moving factor, ``floor(for_time / step)``.

    :param for_time: unix time or datetime; ``0`` reads the system clock
    :param step: time-step length in seconds
    """
    return _unix_time(for_time) // utils.check_int(step, "step", minval=1)


def verify_totp(
    password: str,
    secret: bytes,
    timestamp: Optional[TimeLike] = 0,
    digits: int = DEFAULT_DIGITS,
    step: int = DEFAULT_STEP,
    allowed_drift: int = DEFAULT_DRIFT,
    digest: Any = DEFAULT_DIGEST,
) -> Tuple[bool, int]:
    """
    Checks ``password`` against the time slices within ``allowed_drift`` steps
    of ``timestamp``.

    If a ``timestamp`` of 0 is provided, the current system time is used.

    :param password: the OTP submitted by the user
    :param secret: shared secret as raw bytes
    :param timestamp: unix time to verify at
    :param digits: password length
    :param step: time-step length in seconds
    :param allowed_drift: window radius, in steps
    :param digest: hash algorithm
    :returns: ``(matched, discrepancy)`` where ``discrepancy`` is the number of
        steps the matching slice lies from the current one; ``(False, 0)`` if
        nothing in the window matches
    :raises ClockError: if ``timestamp`` is 0 and the clock is unusable
    """
    secret = utils.check_secret(secret)
    digits = utils.check_digits(digits)
    step = utils.check_int(step, "step", minval=1)
    allowed_drift = utils.check_int(allowed_drift, "allowed_drift")
    nonce = _unix_time(timestamp) // step
    return _scan(password, secret, nonce, allowed_drift, digits, resolve_digest(digest))


def _scan(password: str, secret: bytes, nonce: int, allowed_drift: int, digits: int, digest: Digest) -> Tuple[bool, int]:
    # Clamped to the counter range so windows near the epoch (or the far end) stay valid.
    start = max(nonce - allowed_drift, 0)
    end = min(nonce + allowed_drift, utils.MAX_COUNTER)

    for counter in range(start, end + 1):
        if utils.strings_equal(str(password), _generate(secret, counter, digits, digest)):
            log.debug("TOTP matched at slice %d (nonce %d)", counter, nonce)
            return True, counter - nonce

    log.debug("TOTP no match in slices %d..%d", start, end)
    return False, 0


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        secret: bytes,
        digits: int = DEFAULT_DIGITS,
        digest: Any = DEFAULT_DIGEST,
        interval: int = DEFAULT_STEP,
    ) -> None:
        """
        :param secret: shared secret as raw bytes
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        """
        self.interval = utils.check_int(interval, "step", minval=1)
        super().__init__(secret=secret, digits=digits, digest=digest)

    def at(self, for_time: TimeLike, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.generate_otp(self.timecode(now()))

    def timecode(self, for_time: TimeLike) -> int:
        return timecode(for_time, self.interval)

    def remaining(self, for_time: Optional[TimeLike] = 0) -> int:
        """Seconds until the slice containing ``for_time`` expires."""
        return self.interval - _unix_time(for_time) % self.interval

    def verify(self, otp: str, for_time: Optional[TimeLike] = 0, allowed_drift: int = DEFAULT_DRIFT) -> Tuple[bool, int]:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: time to check OTP at (defaults to now)
        :param allowed_drift: extends the validity to this many counter ticks before and after the current one
        :returns: ``(matched, discrepancy)``, see :func:`verify_totp`
        """
        allowed_drift = utils.check_int(allowed_drift, "allowed_drift")
        return _scan(otp, self.secret, self.timecode(for_time), allowed_drift, self.digits, self.digest)
