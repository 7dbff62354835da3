"""Helpers for the audio-track API."""

import re
from typing import Any, Iterable, Mapping, Union
from urllib.parse import quote

API_HOSTNAME = "https://api-v2.soundcloud.com/"
BASE_URL = "https://soundcloud.com/"

_CLIENT_ID = re.compile(r'"clientId"\s*:\s*"([0-9a-zA-Z]{32})"')
_MP3_PRESET = re.compile(r"^mp3")


def resolve_url(target_url: str) -> str:
    """API URL that resolves a public track URL."""
    return API_HOSTNAME + "resolve?url=" + quote(target_url, safe="$&+:=@")


def thumbnail_url(url: str) -> str:
    """Swap the first '-large' artwork size for '-original'."""
    if not url:
        return ""
    return url.replace("-large", "-original", 1)


def find_client_id(page: Union[str, bytes]) -> str:
    """Pull the 32-character client id out of a page."""
    if isinstance(page, (bytes, bytearray)):
        page = bytes(page).decode("utf-8", errors="replace")
    found = _CLIENT_ID.search(page)
    if found is None:
        raise ValueError("failed to find clientId")
    return found.group(1)


def pick_progressive_mp3(transcodings: Iterable[Mapping[str, Any]]) -> Mapping[str, Any]:
    """First transcoding with an mp3 preset served progressively."""
    for transcoding in transcodings:
        preset = transcoding.get("preset") or ""
        protocol = (transcoding.get("format") or {}).get("protocol")
        if _MP3_PRESET.match(preset) and protocol == "progressive":
            return transcoding
    raise ValueError("no suitable format found")