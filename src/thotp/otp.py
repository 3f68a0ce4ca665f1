from typing import Any

from . import utils
from .digests import SHA1, Digest, resolve_digest

DEFAULT_DIGITS = 6
DEFAULT_DIGEST = SHA1


def generate(secret: bytes, moving_factor: int, digits: int = DEFAULT_DIGITS, digest: Any = DEFAULT_DIGEST) -> str:
    """
    Generates the one-time password for a moving factor (RFC 4226).

    :param secret: shared secret as raw bytes
    :param moving_factor: HOTP counter, or the TOTP time slice; ``[0, 2**64 - 1]``
    :param digits: password length, at least 1; above 10 the code is the
        whole truncated value, zero padded
    :param digest: hash algorithm, see :func:`thotp.digests.resolve_digest`
    :returns: decimal password, zero padded to ``digits`` characters
    :raises HashError: if the HMAC invocation fails
    :raises ConfigurationError: if ``digits`` or ``digest`` is unsupported
    """
    return _generate(utils.check_secret(secret), moving_factor, utils.check_digits(digits), resolve_digest(digest))


def _generate(secret: bytes, moving_factor: int, digits: int, digest: Digest) -> str:
    # Arguments are already validated; verifiers call this once per window slot.
    hmac_hash = digest.mac(secret, utils.int_to_bytestring(moving_factor))
    code = utils.dynamic_truncate(hmac_hash)
    if digits < utils.MAX_SIGNIFICANT_DIGITS:
        code %= 10**digits
    return str(code).rjust(digits, "0")


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(self, secret: bytes, digits: int = DEFAULT_DIGITS, digest: Any = DEFAULT_DIGEST) -> None:
        """
        :param secret: shared secret as raw bytes
        :param digits: number of integers in the OTP, at least 1
        :param digest: hash algorithm used in the HMAC (SHA1 by default)
        """
        self.secret = utils.check_secret(secret)
        self.digits = utils.check_digits(digits)
        self.digest = resolve_digest(digest)

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return _generate(self.secret, input, self.digits, self.digest)

    def __repr__(self) -> str:
        # Never include the secret.
        return "{}(digits={}, digest={})".format(type(self).__name__, self.digits, self.digest.name)
