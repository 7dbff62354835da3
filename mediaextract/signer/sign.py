"""Signed headers for mobile API requests."""

import hashlib
import time
from typing import Dict, Mapping, Sequence, Union
from urllib.parse import urlencode

from .argus import LICENSE_ID, new_argus
from .gorgon import Gorgon
from .ladon import new_ladon

Params = Mapping[str, Union[str, Sequence[str]]]


def encode_params(params: Params) -> str:
    """Encode query parameters sorted by key, with form-style escaping."""
    return urlencode(sorted(params.items()), doseq=True)


def _app_id(params: Params) -> str:
    value = params.get("aid", "")
    if isinstance(value, str):
        return value
    return value[0] if value else ""


def sign(params: Params, payload: str) -> Dict[str, str]:
    """Return the signature headers for a request with ``params`` and body ``payload``."""
    unix = int(time.time())
    app_id = _app_id(params)
    if not app_id:
        raise ValueError("missing app id")
    params_str = encode_params(params)

    stub = hashlib.md5(payload.encode()).hexdigest().upper() if payload else ""

    gorgon = Gorgon(params_str, unix, payload, "").value()
    ladon = new_ladon(unix, LICENSE_ID, app_id)
    argus = new_argus(params, stub, unix, app_id)

    headers = {
        "X-Ss-Req-Ticket": gorgon["ticket"],
        "X-Khronos": gorgon["khronos"],
        "X-Gorgon": gorgon["gorgon"],
        "X-Ladon": ladon,
        "X-Argus": argus,
    }
    if payload:
        headers["Content-length"] = str(len(payload))
        headers["X-Ss-Stub"] = stub
    return headers