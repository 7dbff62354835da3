import base64

import pytest

from mediaextract.signer.ladon import encrypt_ladon, new_ladon
from mediaextract.signer.padding import padding_size

MD5HEX = b"0123456789abcdef0123456789abcdef"


def test_new_ladon_layout():
    rnd = b"\x01\x02\x03\x04"
    value = new_ladon(1700000000, "1611921764", "1233", rnd)
    raw = base64.b64decode(value)
    data_len = len("1700000000-1611921764-1233")
    assert raw[:4] == rnd
    assert len(raw) == 4 + padding_size(data_len)


def test_new_ladon_is_deterministic_for_fixed_random_bytes():
    rnd = b"\xaa\xbb\xcc\xdd"
    first = new_ladon(1, "lic", "1233", rnd)
    second = new_ladon(1, "lic", "1233", rnd)
    assert first == second
    raw = base64.b64decode(first)
    assert raw[:4] == rnd
    assert len(raw) == 4 + padding_size(len("1-lic-1233"))


def test_new_ladon_depends_on_inputs():
    rnd = b"\xaa\xbb\xcc\xdd"
    base = new_ladon(1, "lic", "1233", rnd)
    assert base64.b64decode(base)[:4] == rnd
    assert base != new_ladon(2, "lic", "1233", rnd)
    assert base != new_ladon(1, "lic", "1234", rnd)
    assert base != new_ladon(1, "lic", "1233", b"\x00\x00\x00\x00")


def test_new_ladon_draws_random_prefix():
    raw = base64.b64decode(new_ladon(5, "lic", "1233"))
    assert len(raw) == 4 + padding_size(len("5-lic-1233"))


def test_new_ladon_rejects_bad_random_length():
    with pytest.raises(ValueError):
        new_ladon(1, "lic", "1233", b"\x00")


@pytest.mark.parametrize("size", [1, 5, 15, 16, 17, 32, 33])
def test_encrypt_ladon_output_length(size):
    data = bytes(range(size))
    assert len(encrypt_ladon(MD5HEX, data, size)) == padding_size(size)


def test_encrypt_ladon_blocks_are_independent():
    block_a = b"A" * 16
    block_b = b"B" * 16
    out = encrypt_ladon(MD5HEX, block_a + block_b, 32)
    assert out[:16] == encrypt_ladon(MD5HEX, block_a, 16)
    assert out[16:] == encrypt_ladon(MD5HEX, block_b, 16)


def test_encrypt_ladon_depends_on_key():
    data = b"hello world"
    other = b"f" * 32
    first = encrypt_ladon(MD5HEX, data, len(data))
    assert len(first) == 16
    assert first != encrypt_ladon(other, data, len(data))