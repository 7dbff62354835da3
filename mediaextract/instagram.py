"""Parsing and request building for photo-sharing post data."""

import hashlib
import json
import re
import secrets
import string
import time
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qs, urlsplit

from .media import DownloadContext, Media, MediaCodec, MediaFormat, MediaType

GRAPHQL_ENDPOINT = "https://www.instagram.com/graphql/query/"
POLARIS_ACTION = "PolarisPostActionLoadPostQueryQuery"

IGRAM_HOSTNAME = "api.igram.world"
IGRAM_KEY = "aaeaf2805cea6abef3f9d2b6a666fce62fd9d612a43ab772bb50ce81455112e0"
IGRAM_TIMESTAMP = "1742201548873"

EMBED_PATTERN = re.compile(r"new ServerJS\(\)\);s\.handle\(({.*})\);requireLazy")

WEB_HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "Accept-Language": "en-GB,en;q=0.9",
    "Cache-Control": "max-age=0",
    "Dnt": "1",
    "Priority": "u=0, i",
    "Sec-Ch-Ua": 'Chromium";v="124", "Google Chrome";v="124", "Not-A.Brand";v="99',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": "macOS",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
}

IGRAM_HEADERS = {"Content-Type": "application/json"}

_VIDEO_TYPES = ("GraphVideo", "XDTGraphVideo")
_IMAGE_TYPES = ("GraphImage", "XDTGraphImage")
_SIDECAR_TYPES = ("GraphSidecar", "XDTGraphSidecar")

_BASE64_ALPHABET = string.ascii_letters + string.digits + "+/"


def _caption(data: Mapping[str, Any]) -> str:
    edges = (data.get("edge_media_to_caption") or {}).get("edges") or []
    if not edges:
        return ""
    node = (edges[0] or {}).get("node") or {}
    return node.get("text") or ""


def _video_format(node: Mapping[str, Any]) -> MediaFormat:
    dimensions = node.get("dimensions") or {}
    return MediaFormat(
        format_id="video",
        type=MediaType.VIDEO,
        video_codec=MediaCodec.AVC,
        audio_codec=MediaCodec.AAC,
        url=[node.get("video_url") or ""],
        thumbnail=[node.get("display_url") or ""],
        width=int(dimensions.get("width") or 0),
        height=int(dimensions.get("height") or 0),
    )


def _image_format(node: Mapping[str, Any]) -> MediaFormat:
    return MediaFormat(
        format_id="image",
        type=MediaType.PHOTO,
        url=[node.get("display_url") or ""],
    )


def parse_gql_media(ctx: DownloadContext, data: Mapping[str, Any]) -> List[Media]:
    """Turn a shortcode media object into media items."""
    caption = _caption(data)
    content_id = ctx.matched_content_id
    content_url = ctx.matched_content_url
    typename = data.get("__typename") or ""

    if typename in _VIDEO_TYPES or typename in _IMAGE_TYPES:
        media = ctx.extractor.new_media(content_id, content_url)
        media.set_caption(caption)
        if typename in _VIDEO_TYPES:
            media.add_format(_video_format(data))
        else:
            media.add_format(_image_format(data))
        return [media]

    if typename in _SIDECAR_TYPES:
        edges = (data.get("edge_sidecar_to_children") or {}).get("edges") or []
        if edges:
            media_list = []
            for edge in edges:
                node = (edge or {}).get("node") or {}
                media = ctx.extractor.new_media(content_id, content_url)
                media.set_caption(caption)
                node_type = node.get("__typename") or ""
                if node_type in _VIDEO_TYPES:
                    media.add_format(_video_format(node))
                elif node_type in _IMAGE_TYPES:
                    media.add_format(_image_format(node))
                media_list.append(media)
            return media_list

    raise ValueError(f"unknown media type: {typename}")


def _walk(data: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(data, dict):
        for key, value in data.items():
            yield key, value
            yield from _walk(value)
    elif isinstance(data, list):
        for item in data:
            yield from _walk(item)


def _find_key(data: Any, key: str) -> Optional[Any]:
    return next((value for found, value in _walk(data) if found == key), None)


def _loads(text: Union[str, bytes]) -> Any:
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    return json.loads(text, strict=False)


def parse_embed_gql(body: Union[str, bytes]) -> Dict[str, Any]:
    """Extract the shortcode media object from an embed page."""
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", errors="replace")
    found = EMBED_PATTERN.search(body)
    if found is None:
        raise ValueError("failed to find JSON in response")
    try:
        data = _loads(found.group(1))
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal JSON: {exc}") from exc

    context = _find_key(data, "contextJSON")
    if context is None:
        raise ValueError("contextJSON not found in data")
    if not isinstance(context, str):
        raise ValueError("contextJSON is not a string")
    try:
        context_json = _loads(context)
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal contextJSON: {exc}") from exc
    if not isinstance(context_json, dict):
        raise ValueError("failed to unmarshal contextJSON: not an object")

    gql_data = context_json.get("gql_data")
    if not gql_data:
        raise ValueError("gql_data is nil")
    media = gql_data.get("shortcode_media")
    if not media:
        raise ValueError("media is nil")
    return media


def build_igram_payload(content_url: str, timestamp: Optional[str] = None) -> bytes:
    """Signed JSON request body for the conversion service."""
    if timestamp is None:
        timestamp = str(int(time.time() * 1000))
    secret_hash = hashlib.sha256(
        (content_url + timestamp + IGRAM_KEY).encode()
    ).hexdigest().lower()
    payload = {
        "url": content_url,
        "ts": timestamp,
        "_ts": IGRAM_TIMESTAMP,
        "_tsc": "0",
        "_s": secret_hash,
    }
    return json.dumps(payload, separators=(",", ":")).encode()


def parse_igram_response(body: Union[str, bytes]) -> List[Dict[str, Any]]:
    """Items of a conversion response, which holds one object or a list of them."""
    try:
        parsed = _loads(body)
    except ValueError as exc:
        raise ValueError(f"failed to decode response: {exc}") from exc
    if parsed is None:
        return [{}]
    if isinstance(parsed, dict):
        return [parsed]
    if isinstance(parsed, list) and all(
        item is None or isinstance(item, dict) for item in parsed
    ):
        return [item if item is not None else {} for item in parsed]
    raise ValueError("failed to decode response: unexpected JSON shape")


def cdn_url(content_url: str) -> str:
    """The ``uri`` query parameter of a proxied media URL, or an empty string."""
    try:
        query = urlsplit(content_url).query
    except ValueError as exc:
        raise ValueError(f"can't parse igram URL: {exc}") from exc
    values = parse_qs(query, keep_blank_values=True).get("uri")
    return values[0] if values else ""


def _random_alpha(length: int) -> str:
    return "".join(secrets.choice(string.ascii_letters) for _ in range(length))


def _random_base64(length: int) -> str:
    return "".join(secrets.choice(_BASE64_ALPHABET) for _ in range(length))


def build_gql_data() -> Tuple[Dict[str, str], Dict[str, str]]:
    """Headers and form body for an anonymous post query."""
    rollout_hash = "1019933358"
    session = "::" + _random_alpha(6)
    session_data = _random_base64(8)
    csrf_token = _random_base64(32)
    device_id = _random_base64(24)
    machine_id = _random_base64(24)
    dynamic_flags = _random_base64(154)
    client_session_rnd = _random_base64(154)
    jazoest = str(secrets.randbelow(10000) + 1)
    timestamp = str(int(time.time()))

    cookies = [
        "csrftoken=" + csrf_token,
        "ig_did=" + device_id,
        "wd=1280x720",
        "dpr=2",
        "mid=" + machine_id,
        "ig_nrcb=1",
    ]
    headers = {
        "x-ig-app-id": "936619743392459",
        "X-FB-LSD": session_data,
        "X-CSRFToken": csrf_token,
        "X-Bloks-Version-Id": "6309c8d03d8a3f47a1658ba38b304a3f837142ef5f637ebf1f8f52d4b802951e",
        "x-asbd-id": "129477",
        "cookie": "; ".join(cookies),
        "Content-Type": "application/x-www-form-urlencoded",
        "X-FB-Friendly-Name": POLARIS_ACTION,
    }
    body = {
        "__d": "www",
        "__a": "1",
        "__s": session,
        "__hs": "20126.HYP:instagram_web_pkg.2.1...0",
        "__req": "b",
        "__ccg": "EXCELLENT",
        "__rev": rollout_hash,
        "__hsi": "7436540909012459023",
        "__dyn": dynamic_flags,
        "__csr": client_session_rnd,
        "__user": "0",
        "__comet_req": "7",
        "libav": "0",
        "dpr": "2",
        "lsd": session_data,
        "jazoest": jazoest,
        "__spin_r": rollout_hash,
        "__spin_b": "trunk",
        "__spin_t": timestamp,
    }
    return headers, body