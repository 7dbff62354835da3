"""Format parsing for video API responses from a proxy instance."""

from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from .media import DownloadConfig, MediaCodec, MediaFormat, MediaType

INV_ENDPOINT = "/api/v1/videos/"
CHUNK_SIZE = 10 * 1024 * 1024


def _to_int(text: str) -> int:
    try:
        return int(text)
    except (TypeError, ValueError):
        return 0


def parse_video_codec(codecs: str) -> Optional[MediaCodec]:
    """Video codec named in a codecs string, or None."""
    if "avc" in codecs or "h264" in codecs:
        return MediaCodec.AVC
    if "hvc" in codecs or "h265" in codecs:
        return MediaCodec.HEVC
    if "av01" in codecs or "av1" in codecs:
        return MediaCodec.AV1
    if "vp9" in codecs:
        return MediaCodec.VP9
    if "vp8" in codecs:
        return MediaCodec.VP8
    return None


def parse_audio_codec(codecs: str) -> Optional[MediaCodec]:
    """Audio codec named in a codecs string, or None."""
    if "mp4a" in codecs:
        return MediaCodec.AAC
    if "opus" in codecs:
        return MediaCodec.OPUS
    if "mp3" in codecs:
        return MediaCodec.MP3
    if "flac" in codecs:
        return MediaCodec.FLAC
    if "vorbis" in codecs:
        return MediaCodec.VORBIS
    return None


def parse_stream_type(
    stream_type: str,
) -> Tuple[Optional[MediaType], Optional[MediaCodec], Optional[MediaCodec]]:
    """Split a ``mime; codecs=...`` string into media type and codecs."""
    parts = stream_type.split("; ")
    if len(parts) != 2:
        return None, None, None
    codecs = parts[1]
    video_codec = parse_video_codec(codecs)
    audio_codec = parse_audio_codec(codecs)
    if video_codec is not None:
        media_type: Optional[MediaType] = MediaType.VIDEO
    elif audio_codec is not None:
        media_type = MediaType.AUDIO
    else:
        media_type = None
    return media_type, video_codec, audio_codec


def parse_inv_url(url: str, instance: str) -> str:
    """Make a stream URL absolute against the instance base."""
    if url.startswith(instance):
        return url
    return instance + url


def normalize_instance(instance: str) -> str:
    """Validate an instance URL and drop one trailing slash."""
    if not instance:
        raise ValueError("invidious instance url is not set")
    try:
        parsed = urlsplit(instance)
    except ValueError as exc:
        raise ValueError(f"failed to parse youtube instance url: {exc}") from exc
    return parsed.geturl().removesuffix("/")


def parse_inv_formats(data: Mapping[str, Any], instance: str) -> List[MediaFormat]:
    """Build formats from the adaptive formats of a video response."""
    duration = int(data.get("lengthSeconds") or 0)
    title = data.get("title") or ""
    author = data.get("author") or ""
    formats = []
    for entry in data.get("adaptiveFormats") or []:
        url = entry.get("url") or ""
        if not url:
            continue
        media_type, video_codec, audio_codec = parse_stream_type(entry.get("type") or "")
        if media_type is None:
            continue
        bitrate = _to_int(entry.get("bitrate") or "")
        width = height = 0
        size = entry.get("size") or ""
        if size:
            dimensions = size.split("x")
            if len(dimensions) == 2:
                width, height = _to_int(dimensions[0]), _to_int(dimensions[1])
        formats.append(
            MediaFormat(
                format_id=entry.get("itag") or "",
                type=media_type,
                video_codec=video_codec,
                audio_codec=audio_codec,
                width=width,
                height=height,
                bitrate=bitrate,
                duration=duration,
                url=[parse_inv_url(url, instance)],
                title=title,
                artist=author,
                download_config=DownloadConfig(chunk_size=CHUNK_SIZE),
            )
        )
    return formats