import pytest

from mediaextract.media import MediaCodec, MediaType
from mediaextract.ninegag import find_best_photo, parse_video_formats


def test_best_photo_is_widest_jpeg():
    images = {
        "small": {"width": 300, "height": 200, "url": "https://img.example.com/s.jpg"},
        "large": {"width": 700, "height": 500, "url": "https://img.example.com/l.jpg"},
        "webp": {"width": 900, "height": 600, "url": "https://img.example.com/w.webp"},
    }
    assert find_best_photo(images)["url"] == "https://img.example.com/l.jpg"


def test_best_photo_missing():
    with pytest.raises(ValueError):
        find_best_photo({"a": {"width": 10, "url": "https://img.example.com/a.png"}})


def test_best_photo_zero_width_ignored():
    with pytest.raises(ValueError):
        find_best_photo({"a": {"width": 0, "url": "https://img.example.com/a.jpg"}})


def test_video_formats():
    images = {
        "image700": {"width": 700, "height": 400, "url": "https://img.example.com/p.jpg"},
        "image460sv": {
            "width": 460,
            "height": 260,
            "duration": 12,
            "url": "https://img.example.com/v.mp4",
            "vp9Url": "https://img.example.com/v.webm",
            "av1Url": "",
        },
    }
    formats = parse_video_formats(images)
    codecs = [f.video_codec for f in formats]
    assert codecs == [MediaCodec.AVC, MediaCodec.VP9]
    for fmt in formats:
        assert fmt.type == MediaType.VIDEO
        assert fmt.audio_codec == MediaCodec.AAC
        assert fmt.format_id == "video_" + fmt.video_codec.value
        assert (fmt.width, fmt.height, fmt.duration) == (460, 260, 12)
        assert fmt.thumbnail == ["https://img.example.com/p.jpg"]
    assert formats[1].url == ["https://img.example.com/v.webm"]


def test_video_formats_without_thumbnail():
    images = {"v": {"width": 1, "height": 1, "duration": 3, "url": "https://img.example.com/v.mp4"}}
    formats = parse_video_formats(images)
    assert len(formats) == 1
    assert formats[0].thumbnail == []


def test_video_formats_missing_video():
    with pytest.raises(ValueError):
        parse_video_formats({"p": {"width": 1, "url": "https://img.example.com/p.jpg"}})