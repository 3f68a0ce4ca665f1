from hmac import compare_digest

from .errors import ConfigurationError

# Moving factors are encoded as unsigned 64-bit integers.
COUNTER_MODULUS = 1 << 64
MAX_COUNTER = COUNTER_MODULUS - 1

MIN_DIGITS = 1
# The truncated value has at most 10 decimal digits; longer codes are zero padded.
MAX_SIGNIFICANT_DIGITS = 10


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    check_counter(i, "moving factor")
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def dynamic_truncate(hmac_hash: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    The low nibble of the last byte selects an offset; the four bytes found
    there are read big-endian and the sign bit is cleared.

    :param hmac_hash: HMAC output, at least 20 bytes
    :returns: an integer in ``[0, 2**31 - 1]``
    """
    if len(hmac_hash) < 20:
        raise ValueError("HMAC output must be at least 20 bytes, got {}".format(len(hmac_hash)))
    offset = hmac_hash[-1] & 0xF
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))


def check_secret(secret: bytes) -> bytes:
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise TypeError("secret must be bytes, not {}".format(type(secret).__name__))
    return bytes(secret)


def check_digits(digits: int) -> int:
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise ConfigurationError("digits must be an integer, not {!r}".format(digits))
    if digits < MIN_DIGITS:
        raise ConfigurationError("digits must be >= {}".format(MIN_DIGITS))
    return digits


def check_int(value: int, param: str, minval: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError("{} must be an integer, not {!r}".format(param, value))
    if value < minval:
        raise ConfigurationError("{} must be >= {}".format(param, minval))
    return value


def check_counter(value: int, param: str = "counter") -> int:
    """Rejects moving factors that are not ints in the unsigned 64-bit range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("{} must be an integer, not {!r}".format(param, value))
    if value < 0 or value > MAX_COUNTER:
        raise ValueError("{} must be in range [0, 2**64 - 1]".format(param))
    return value
