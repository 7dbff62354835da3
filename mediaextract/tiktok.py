"""Request building and response parsing for the short-video API and web pages."""

import json
import re
import secrets
import time
import uuid
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

from .debugdump import write_file
from .media import Extractor, MediaCodec, MediaFormat, MediaType

API_HOSTNAME = "api.tiktokv.com"
APP_NAME = "musical_ly"
APP_ID = "1233"
APP_VERSION = "39.8.2"
MANIFEST_APP_VERSION = "2023508030"
PACKAGE_ID = "com.zhiliaoapp.musically/" + MANIFEST_APP_VERSION
WEB_BASE = "https://www.tiktok.com/@_/video/{}"
APP_USER_AGENT = (
    PACKAGE_ID
    + " (Linux; U; Android 13; en_US; Pixel 7; Build/TD1A.220804.031; Cronet/58.0.2991.0)"
)
API_URL = f"https://{API_HOSTNAME}/aweme/v1/aweme/detail/"

BASE_HOST = ["tiktok", "vxtiktok"]

UNIVERSAL_DATA_PATTERN = re.compile(
    r'<script[^>]+\bid="__UNIVERSAL_DATA_FOR_REHYDRATION__"[^>]*>(.*?)</script>'
)

APP_HEADERS = {
    "User-Agent": APP_USER_AGENT,
    "Accept": "application/json",
    "Content-Type": "application/x-www-form-urlencoded",
}

WEB_HEADERS = {
    "Host": "www.tiktok.com",
    "Connection": "keep-alive",
    "User-Agent": "Mozilla/5.0",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-us,en;q=0.5",
    "Sec-Fetch-Mode": "navigate",
}

VM_EXTRACTOR = Extractor(
    name="TikTok VM",
    code_name="tiktok",
    url_pattern=r"https://((?:vm|vt|www)\.)?(vx)?tiktok\.com/(?:t/)?(?P<id>[a-zA-Z0-9]+)",
    host=list(BASE_HOST),
    is_redirect=True,
)

EXTRACTOR = Extractor(
    name="TikTok",
    code_name="tiktok",
    url_pattern=(
        r"https?://((www|m)\.)?(vx)?tiktok\.com/((?:embed|@[\w\.-]+)/)?"
        r"(v(ideo)?|p(hoto)?)/(?P<id>[0-9]+)"
    ),
    host=list(BASE_HOST),
)

_INSTALL_OFFSET_MIN = 86400
_INSTALL_OFFSET_MAX = 1123200
_DEVICE_ID_MIN = 7250000000000000000
_DEVICE_ID_MAX = 7351147085025500000


def app_version_code(version: str) -> str:
    """Join the dotted version parts as two-digit numbers."""
    parts = []
    for part in version.split("."):
        try:
            number = int(part)
        except ValueError as exc:
            raise ValueError(f"failed to parse version part: {exc}") from exc
        parts.append(f"{number:02d}")
    return "".join(parts)


def build_post_data(aweme_id: str) -> str:
    """Form body for a detail request."""
    return urlencode(sorted({"aweme_id": aweme_id, "request_source": "0"}.items()))


def random_install_time() -> str:
    """A Unix time between one and thirteen days ago."""
    offset = _INSTALL_OFFSET_MIN + secrets.randbelow(_INSTALL_OFFSET_MAX - _INSTALL_OFFSET_MIN)
    return str(int(time.time()) - offset)


def random_udid() -> str:
    """Sixteen random lowercase hex characters."""
    return "".join(secrets.choice("0123456789abcdef") for _ in range(16))


def random_device_id() -> str:
    """A random device id in the range the API accepts."""
    return str(_DEVICE_ID_MIN + secrets.randbelow(_DEVICE_ID_MAX - _DEVICE_ID_MIN))


def build_api_query() -> Dict[str, str]:
    """Query parameters of a mobile app detail request."""
    now = int(time.time())
    return {
        "device_platform": "android",
        "os": "android",
        "ssmix": "0",
        "_rticket": str(now * 1000),
        "cdid": str(uuid.uuid4()),
        "channel": "googleplay",
        "aid": APP_ID,
        "app_name": APP_NAME,
        "version_code": app_version_code(APP_VERSION),
        "version_name": APP_VERSION,
        "manifest_version_code": MANIFEST_APP_VERSION,
        "update_version_code": MANIFEST_APP_VERSION,
        "ab_version": APP_VERSION,
        "resolution": "1080*2400",
        "dpi": "420",
        "device_type": "Pixel 7",
        "device_brand": "Google",
        "language": "en",
        "os_api": "29",
        "os_version": "13",
        "ac": "wifi",
        "is_pad": "0",
        "current_region": "US",
        "app_type": "normal",
        "app_version": APP_VERSION,
        "last_install_time": random_install_time(),
        "timezone_name": "America/New_York",
        "residence": "US",
        "app_language": "en",
        "timezone_offset": "-14400",
        "host_abi": "armeabi-v7a",
        "locale": "en",
        "ac2": "wifi5g",
        "uoo": "1",
        "carrier_region": "US",
        "build_number": APP_VERSION,
        "region": "US",
        "ts": str(now),
        "iid": "123",
        "device_id": random_device_id(),
        "openudid": random_udid(),
    }


def parse_play_addr(video: Mapping[str, Any], play_addr: Mapping[str, Any]) -> MediaFormat:
    """Build a video format from one play address of an API video object."""
    format_id = play_addr.get("url_key") or ""
    if not format_id:
        raise ValueError("url_key not found")
    video_codec = MediaCodec.AVC if "h264" in format_id else MediaCodec.HEVC
    cover = video.get("cover") or {}
    return MediaFormat(
        format_id=format_id,
        type=MediaType.VIDEO,
        url=list(play_addr.get("url_list") or []),
        video_codec=video_codec,
        audio_codec=MediaCodec.AAC,
        duration=int(video.get("duration") or 0) // 1000,
        thumbnail=list(cover.get("url_list") or []),
        width=int(play_addr.get("width") or 0),
        height=int(play_addr.get("height") or 0),
    )


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


def parse_universal_data(body: Union[str, bytes]) -> Dict[str, Any]:
    """Extract the item struct from a web video page."""
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", errors="replace")
    found = UNIVERSAL_DATA_PATTERN.search(body)
    if found is None:
        raise ValueError("universal data not found")
    try:
        data = json.loads(found.group(1))
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal universal data: {exc}") from exc

    default_scope = _find_key(data, "__DEFAULT_SCOPE__")
    if default_scope is None:
        raise ValueError("default scope not found")
    item_struct = _find_key(default_scope, "itemStruct")
    if item_struct is None:
        raise ValueError("item struct not found")

    write_file("tt_item_struct", item_struct)

    if not isinstance(item_struct, dict):
        raise ValueError("failed to unmarshal item struct: not an object")
    return item_struct