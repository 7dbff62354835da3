"""Core media data types and URL-matching extractors."""

import enum
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Union


class MediaType(str, enum.Enum):
    VIDEO = "video"
    AUDIO = "audio"
    PHOTO = "photo"

    def __str__(self) -> str:
        return self.value


class MediaCodec(str, enum.Enum):
    AVC = "avc"
    HEVC = "hevc"
    VP8 = "vp8"
    VP9 = "vp9"
    AV1 = "av1"
    AAC = "aac"
    OPUS = "opus"
    MP3 = "mp3"
    FLAC = "flac"
    VORBIS = "vorbis"

    def __str__(self) -> str:
        return self.value


@dataclass
class DownloadConfig:
    """Per-format download tweaks."""

    chunk_size: int = 0
    remux: bool = True
    cookies: list = field(default_factory=list)


@dataclass
class MediaFormat:
    """One downloadable rendition of a media item."""

    format_id: str
    type: MediaType
    url: List[str] = field(default_factory=list)
    video_codec: Optional[MediaCodec] = None
    audio_codec: Optional[MediaCodec] = None
    thumbnail: List[str] = field(default_factory=list)
    width: int = 0
    height: int = 0
    duration: int = 0
    bitrate: int = 0
    title: str = ""
    artist: str = ""
    download_config: Optional[DownloadConfig] = None


@dataclass
class Media:
    """A single media item with its available formats."""

    content_id: str
    content_url: str
    extractor_code_name: str = ""
    caption: str = ""
    nsfw: bool = False
    formats: List[MediaFormat] = field(default_factory=list)

    def add_format(self, fmt: MediaFormat) -> None:
        self.formats.append(fmt)

    def set_caption(self, caption: str) -> None:
        self.caption = caption


@dataclass
class Extractor:
    """A named URL pattern for one site, with the hosts it answers for."""

    name: str
    code_name: str
    url_pattern: Union[str, Pattern[str]]
    host: List[str] = field(default_factory=list)
    is_redirect: bool = False
    type: str = "single"
    category: str = "social"

    def __post_init__(self) -> None:
        if isinstance(self.url_pattern, str):
            self.url_pattern = re.compile(self.url_pattern)

    def new_media(self, content_id: str, content_url: str) -> Media:
        return Media(
            content_id=content_id,
            content_url=content_url,
            extractor_code_name=self.code_name,
        )

    def match(self, url: str) -> Optional["DownloadContext"]:
        """Return a context for ``url`` when the pattern matches anywhere in it."""
        found = self.url_pattern.search(url)
        if found is None:
            return None
        groups = {name: value or "" for name, value in found.groupdict().items()}
        groups["match"] = found.group(0)
        return DownloadContext(
            matched_content_id=groups.get("id", ""),
            matched_content_url=groups["match"],
            matched_groups=groups,
            extractor=self,
        )


@dataclass
class DownloadContext:
    """What an extractor matched in a URL."""

    matched_content_id: str
    matched_content_url: str
    matched_groups: Dict[str, str]
    extractor: Extractor