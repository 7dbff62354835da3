"""Format selection for image-board post responses."""

from typing import Any, Dict, List, Mapping

from .media import MediaCodec, MediaFormat, MediaType

_CODEC_FIELDS = (
    ("url", MediaCodec.AVC),
    ("h265Url", MediaCodec.HEVC),
    ("vp8Url", MediaCodec.VP8),
    ("vp9Url", MediaCodec.VP9),
    ("av1Url", MediaCodec.AV1),
)


def find_best_photo(images: Mapping[str, Mapping[str, Any]]) -> Mapping[str, Any]:
    """The widest JPEG among the post images."""
    best = None
    max_width = 0
    for photo in images.values():
        if not (photo.get("url") or "").endswith(".jpg"):
            continue
        width = photo.get("width") or 0
        if width > max_width:
            max_width = width
            best = photo
    if best is None:
        raise ValueError("no photo found in post")
    return best


def parse_video_formats(images: Mapping[str, Mapping[str, Any]]) -> List[MediaFormat]:
    """One format per codec URL of the post's video, with a JPEG thumbnail if any."""
    video: Dict[str, Any] = {}
    found = False
    thumbnail = ""
    for entry in images.values():
        if (entry.get("duration") or 0) > 0:
            video = dict(entry)
            found = True
        url = entry.get("url") or ""
        if url.endswith(".jpg"):
            thumbnail = url
    if not found:
        raise ValueError("no video found in post")

    formats = []
    for key, codec in _CODEC_FIELDS:
        url = video.get(key) or ""
        if not url:
            continue
        formats.append(
            MediaFormat(
                format_id=f"video_{codec.value}",
                type=MediaType.VIDEO,
                video_codec=codec,
                audio_codec=MediaCodec.AAC,
                url=[url],
                width=video.get("width") or 0,
                height=video.get("height") or 0,
                duration=video.get("duration") or 0,
                thumbnail=[thumbnail] if thumbnail else [],
            )
        )
    return formats