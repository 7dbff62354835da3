"""Access tokens and media building for the GIF hosting API."""

from dataclasses import dataclass
from typing import Any, Mapping

from .media import DownloadContext, Media, MediaCodec, MediaFormat, MediaType, Extractor

BASE_API = "https://api.redgifs.com/v2/"
TOKEN_ENDPOINT = BASE_API + "auth/temporary"
VIDEO_ENDPOINT = BASE_API + "gifs/"
TOKEN_LIFETIME = 23 * 60 * 60

BASE_API_HEADERS = {
    "Referer": "https://www.redgifs.com/",
    "Origin": "https://www.redgifs.com",
    "Content-Type": "application/json",
}

EXTRACTOR = Extractor(
    name="RedGifs",
    code_name="redgifs",
    url_pattern=(
        r"https?://(?:(?:www\.)?redgifs\.com/(?:watch|ifr)/|thumbs2\.redgifs\.com/)"
        r"(?P<id>[^-/?#\.]+)"
    ),
    host=["redgifs"],
)


@dataclass
class Token:
    """A temporary API token and the Unix time it stops being used."""

    access_token: str
    agent: str
    expires_in: int

    def expired(self, now: float) -> bool:
        return now >= self.expires_in


def _video_format(format_id: str, url: str, width: int, height: int, has_audio: bool) -> MediaFormat:
    return MediaFormat(
        format_id=format_id,
        type=MediaType.VIDEO,
        url=[url],
        video_codec=MediaCodec.AVC,
        audio_codec=MediaCodec.AAC if has_audio else None,
        width=width,
        height=height,
    )


def media_from_gif(ctx: DownloadContext, gif: Mapping[str, Any]) -> Media:
    """Build the media item for a gif object of an API response."""
    media = ctx.extractor.new_media(ctx.matched_content_id, ctx.matched_content_url)
    description = gif.get("description") or ""
    if description:
        media.set_caption(description)
    media.nsfw = True

    urls = gif.get("urls") or {}
    width = int(gif.get("width") or 0)
    height = int(gif.get("height") or 0)
    has_audio = bool(gif.get("hasAudio"))

    if urls.get("sd"):
        media.add_format(_video_format("sd", urls["sd"], width // 2, height // 2, has_audio))
    if urls.get("hd"):
        media.add_format(_video_format("hd", urls["hd"], width, height, has_audio))

    poster = urls.get("poster") or ""
    if poster:
        thumbnails = [poster]
        if urls.get("thumbnail"):
            thumbnails.append(urls["thumbnail"])
        duration = int(gif.get("duration") or 0)
        for fmt in media.formats:
            fmt.thumbnail = list(thumbnails)
            fmt.duration = duration
    return media