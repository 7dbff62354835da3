import base64
import hashlib
from unittest.mock import patch

import pytest

from mediaextract.signer.gorgon import Gorgon
from mediaextract.signer.sign import encode_params, sign

PARAMS = {"aid": "1233", "device_id": "0000000000000000001", "app_version": "39.8.2"}
PAYLOAD = "aweme_id=1&request_source=0"


def test_encode_params_sorts_and_escapes():
    assert encode_params({"b": "2", "a": "1 x"}) == "a=1+x&b=2"


def test_encode_params_expands_lists():
    assert encode_params({"k": ["1", "2"]}) == "k=1&k=2"


def test_sign_requires_app_id():
    with pytest.raises(ValueError):
        sign({"device_id": "1"}, PAYLOAD)


@patch("time.time", return_value=1700000000.5)
def test_sign_time_headers(_mock_time):
    headers = sign(PARAMS, PAYLOAD)
    assert headers["X-Khronos"] == "1700000000"
    assert headers["X-Ss-Req-Ticket"] == "1700000000000"


@patch("time.time", return_value=1700000000)
def test_sign_gorgon_matches_direct_computation(_mock_time):
    headers = sign(PARAMS, PAYLOAD)
    expected = Gorgon(encode_params(PARAMS), 1700000000, PAYLOAD, "").value()
    assert headers["X-Gorgon"] == expected["gorgon"]


def test_sign_payload_headers():
    headers = sign(PARAMS, PAYLOAD)
    assert headers["Content-length"] == str(len(PAYLOAD))
    assert headers["X-Ss-Stub"] == hashlib.md5(PAYLOAD.encode()).hexdigest().upper()


def test_sign_without_payload_omits_body_headers():
    headers = sign(PARAMS, "")
    assert "X-Ss-Stub" not in headers
    assert "Content-length" not in headers
    assert set(headers) == {"X-Ss-Req-Ticket", "X-Khronos", "X-Gorgon", "X-Ladon", "X-Argus"}


def test_sign_ladon_and_argus_are_base64():
    headers = sign(PARAMS, PAYLOAD)
    assert base64.b64decode(headers["X-Argus"])[:2] == b"\xf2\x81"
    ladon_raw = base64.b64decode(headers["X-Ladon"])
    assert (len(ladon_raw) - 4) % 16 == 0