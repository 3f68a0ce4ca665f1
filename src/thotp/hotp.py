import logging
from typing import Any, Tuple

from . import utils
from .digests import Digest, resolve_digest
from .otp import DEFAULT_DIGEST, DEFAULT_DIGITS, OTP, _generate

log = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD = 1


def verify_hotp(
    password: str,
    secret: bytes,
    counter: int,
    lookahead: int = DEFAULT_LOOKAHEAD,
    digits: int = DEFAULT_DIGITS,
    digest: Any = DEFAULT_DIGEST,
) -> Tuple[bool, int]:
    """
    Checks ``password`` against the counters ``counter .. counter + lookahead``.

    Counters wrap around at ``2**64``, so a window starting near the maximum
    continues from 0.

    :param password: the OTP submitted by the user
    :param secret: shared secret as raw bytes
    :param counter: the stored counter, the lowest value still accepted
    :param lookahead: how many counters past ``counter`` are also accepted
    :param digits: password length
    :param digest: hash algorithm
    :returns: ``(True, matched + 1)`` on success; the caller must persist the
        new counter to reject replays. ``(False, counter)`` otherwise.
    """
    secret = utils.check_secret(secret)
    digits = utils.check_digits(digits)
    lookahead = utils.check_int(lookahead, "lookahead")
    return _scan(password, secret, counter, lookahead, digits, resolve_digest(digest))


def _scan(password: str, secret: bytes, counter: int, lookahead: int, digits: int, digest: Digest) -> Tuple[bool, int]:
    utils.check_counter(counter)

    for i in range(lookahead + 1):
        current = (counter + i) % utils.COUNTER_MODULUS
        if utils.strings_equal(str(password), _generate(secret, current, digits, digest)):
            log.debug("HOTP matched %d step(s) ahead of counter %d", i, counter)
            return True, (current + 1) % utils.COUNTER_MODULUS

    log.debug("HOTP no match in counters %d..+%d", counter, lookahead)
    return False, counter


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        secret: bytes,
        digits: int = DEFAULT_DIGITS,
        digest: Any = DEFAULT_DIGEST,
        initial_count: int = 0,
    ) -> None:
        """
        :param secret: shared secret as raw bytes
        :param initial_count: starting HMAC counter value, defaults to 0
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        """
        self.initial_count = initial_count
        super().__init__(secret=secret, digits=digits, digest=digest)

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(utils.check_counter(self.initial_count + count, "initial_count + count"))

    def verify(self, otp: str, counter: int, lookahead: int = DEFAULT_LOOKAHEAD) -> Tuple[bool, int]:
        """
        Verifies the OTP passed in against the counter window starting at ``counter``.

        :param otp: the OTP to check against
        :param counter: the stored counter, relative to ``initial_count``
        :param lookahead: number of counters past ``counter`` to accept
        :returns: ``(matched, next_counter)``, see :func:`verify_hotp`
        """
        lookahead = utils.check_int(lookahead, "lookahead")
        start = utils.check_counter(self.initial_count + counter, "initial_count + counter")
        matched, next_counter = _scan(otp, self.secret, start, lookahead, self.digits, self.digest)
        if not matched:
            return False, counter
        return True, (next_counter - self.initial_count) % utils.COUNTER_MODULUS
