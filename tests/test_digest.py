import pytest

from blobtier.core import is_valid_fingerprint
from tests.tools import HELLO, HELLO_SHA1


def test_digest_known_value(hasher):
    assert hasher.digest(HELLO) == HELLO_SHA1


def test_digest_empty_input(hasher):
    assert hasher.digest(b"") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_digest_is_deterministic(hasher):
    data = bytes(range(256)) * 10
    assert hasher.digest(data) == hasher.digest(bytes(data))
    assert hasher.digest(data) != hasher.digest(data + b"\x00")


def test_digest_is_lowercase_hex(hasher):
    fingerprint = hasher.digest(b"\xff" * 1000)
    assert is_valid_fingerprint(fingerprint)


@pytest.mark.parametrize(
    "value",
    [
        "",
        HELLO_SHA1[:-1],
        HELLO_SHA1 + "0",
        HELLO_SHA1.upper(),
        HELLO_SHA1[:-1] + "g",
        HELLO_SHA1 + "\n",
        " " + HELLO_SHA1[1:],
        "hello world",
    ],
)
def test_invalid_fingerprints(value):
    assert not is_valid_fingerprint(value)


def test_valid_fingerprint():
    assert is_valid_fingerprint(HELLO_SHA1)
    assert is_valid_fingerprint("0" * 40)
