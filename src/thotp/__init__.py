"""
HOTP (RFC 4226) and TOTP (RFC 6238) one-time password generation and verification.

The module-level functions take every parameter explicitly; the
:class:`HOTP` and :class:`TOTP` classes bind a secret and configuration
once. Neither keeps any state between calls: HOTP counters are passed in
and returned, and persisting them is up to the caller.
"""

from .digests import SHA1 as SHA1
from .digests import SHA256 as SHA256
from .digests import SHA512 as SHA512
from .digests import Digest as Digest
from .digests import resolve_digest as resolve_digest
from .errors import ClockError as ClockError
from .errors import ConfigurationError as ConfigurationError
from .errors import HashError as HashError
from .errors import ThotpError as ThotpError
from .hotp import DEFAULT_LOOKAHEAD as DEFAULT_LOOKAHEAD
from .hotp import HOTP as HOTP
from .hotp import verify_hotp as verify_hotp
from .otp import DEFAULT_DIGITS as DEFAULT_DIGITS
from .otp import OTP as OTP
from .otp import generate as generate
from .totp import DEFAULT_DRIFT as DEFAULT_DRIFT
from .totp import DEFAULT_STEP as DEFAULT_STEP
from .totp import TOTP as TOTP
from .totp import now as now
from .totp import timecode as timecode
from .totp import verify_totp as verify_totp
