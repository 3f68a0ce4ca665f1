import hashlib
import hmac
import logging
from typing import Any, Callable

from .errors import ConfigurationError, HashError

log = logging.getLogger(__name__)

# HMAC needs the block to fit its padding; truncation reads up to 4 bytes past offset 15.
MAX_BLOCK_SIZE = 256
MIN_DIGEST_SIZE = 20


class Digest(object):
    """
    Keyed-hash adapter around a :mod:`hashlib` constructor.

    Instances are immutable and safe to share between threads.
    """

    def __init__(self, name: str, constructor: Callable[..., Any]) -> None:
        hasher = constructor()
        if hasher.block_size >= MAX_BLOCK_SIZE:
            raise ConfigurationError("{} block size must be less than {} bytes".format(name, MAX_BLOCK_SIZE))
        if hasher.digest_size < MIN_DIGEST_SIZE:
            raise ConfigurationError(
                "selected digest function must generate digest size greater than or equals to {} bytes".format(
                    MIN_DIGEST_SIZE
                )
            )
        self.name = name
        self.constructor = constructor
        self.digest_size = hasher.digest_size
        self.block_size = hasher.block_size

    def mac(self, key: bytes, message: bytes) -> bytes:
        """
        Computes HMAC(key, message) with this algorithm.

        :param key: the shared secret, any length
        :param message: the encoded moving factor
        :returns: ``digest_size`` bytes
        """
        try:
            return hmac.new(key, message, self.constructor).digest()
        except ValueError as e:
            log.warning("HMAC-%s invocation failed: %s", self.name, e)
            raise HashError("HMAC-{} invocation failed".format(self.name)) from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Digest):
            return NotImplemented
        return (self.name, self.constructor) == (other.name, other.constructor)

    def __hash__(self) -> int:
        return hash((self.name, self.constructor))

    def __repr__(self) -> str:
        return "Digest({!r})".format(self.name)


SHA1 = Digest("SHA1", hashlib.sha1)
SHA256 = Digest("SHA256", hashlib.sha256)
SHA512 = Digest("SHA512", hashlib.sha512)

_BY_NAME = {d.name: d for d in (SHA1, SHA256, SHA512)}
_BY_CONSTRUCTOR = {d.constructor: d for d in (SHA1, SHA256, SHA512)}


def resolve_digest(digest: Any) -> Digest:
    """
    Returns the :class:`Digest` adapter for ``digest``.

    :param digest: a :class:`Digest`, a :mod:`hashlib` constructor such as
        ``hashlib.sha256``, or one of the names ``SHA1``, ``SHA256``, ``SHA512``
    :raises ConfigurationError: for names outside the supported set, or
        constructors whose block/digest size cannot be used for HOTP
    """
    if isinstance(digest, Digest):
        return digest
    if isinstance(digest, str):
        try:
            return _BY_NAME[digest.upper().replace("-", "")]
        except KeyError:
            raise ConfigurationError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512") from None
    if callable(digest):
        if digest in _BY_CONSTRUCTOR:
            return _BY_CONSTRUCTOR[digest]
        try:
            name = digest().name.upper()
        except (TypeError, AttributeError) as e:
            raise ConfigurationError("{!r} is not a hashlib constructor".format(digest)) from e
        return Digest(name, digest)
    raise ConfigurationError("unsupported digest: {!r}".format(digest))
