import hashlib

import pytest

import thotp
from thotp.digests import SHA1, SHA256, SHA512, Digest, resolve_digest


@pytest.mark.parametrize(
    "value, expected",
    [
        (SHA256, SHA256),
        ("SHA1", SHA1),
        ("sha256", SHA256),
        ("SHA-512", SHA512),
        (hashlib.sha1, SHA1),
        (hashlib.sha512, SHA512),
    ],
)
def test_resolve_digest(value, expected):
    assert resolve_digest(value) is expected


def test_resolve_other_hashlib_constructor():
    digest = resolve_digest(hashlib.sha3_256)
    assert digest.name == "SHA3_256"
    assert digest.digest_size == 32
    assert len(digest.mac(b"key", b"\0" * 8)) == 32


@pytest.mark.parametrize("value", [hashlib.md5, hashlib.shake_128, "MD5", "whirlpool", 42])
def test_unsupported_digests_rejected(value):
    with pytest.raises(thotp.ConfigurationError):
        resolve_digest(value)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        resolve_digest("MD5")


def test_mac_matches_hmac_sha1():
    # RFC 4226 section 5.4 truncation example input, counter 0
    assert SHA1.mac(b"12345678901234567890", b"\0" * 8).hex() == "cc93cf18508d94934c64b65d8ba7667fb7cde4b0"


def test_mac_failure_raises_hash_error(monkeypatch):
    def broken(*args, **kwargs):
        raise ValueError("unsupported hash type")

    monkeypatch.setattr("thotp.digests.hmac.new", broken)
    with pytest.raises(thotp.HashError) as excinfo:
        thotp.generate(b"secret", 0)
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_digest_equality_and_repr():
    assert Digest("SHA1", hashlib.sha1) == SHA1
    assert SHA1 != SHA256
    assert repr(SHA512) == "Digest('SHA512')"


def test_digest_equality_includes_constructor():
    assert Digest("SHA1", hashlib.sha256) != SHA1
    assert hash(Digest("SHA1", hashlib.sha1)) == hash(SHA1)
