class ThotpError(Exception):
    """
    Base class for errors raised while generating or verifying an OTP.
    """


class ClockError(ThotpError):
    """
    The system clock could not be read, or reports a time before the unix epoch.
    """


class HashError(ThotpError):
    """
    The underlying HMAC invocation failed.
    """


class ConfigurationError(ThotpError, ValueError):
    """
    An OTP parameter (digits, step, window size or digest) is out of range.
    """
