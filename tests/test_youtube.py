import pytest

from mediaextract.media import MediaCodec, MediaType
from mediaextract.youtube import (
    normalize_instance,
    parse_audio_codec,
    parse_inv_formats,
    parse_inv_url,
    parse_stream_type,
    parse_video_codec,
)

INSTANCE = "https://inv.example.com"


def test_stream_type_video():
    assert parse_stream_type('video/mp4; codecs="avc1.4d401f"') == (
        MediaType.VIDEO,
        MediaCodec.AVC,
        None,
    )


def test_stream_type_audio():
    assert parse_stream_type('audio/webm; codecs="opus"') == (
        MediaType.AUDIO,
        None,
        MediaCodec.OPUS,
    )


def test_stream_type_unknown():
    assert parse_stream_type("video/mp4") == (None, None, None)
    assert parse_stream_type('text/plain; codecs="xyz"') == (None, None, None)


@pytest.mark.parametrize(
    "codecs, expected",
    [
        ("avc1", MediaCodec.AVC),
        ("hvc1", MediaCodec.HEVC),
        ("av01.0.08M", MediaCodec.AV1),
        ("vp9", MediaCodec.VP9),
        ("vp8", MediaCodec.VP8),
        ("unknown", None),
    ],
)
def test_video_codec(codecs, expected):
    assert parse_video_codec(codecs) == expected


@pytest.mark.parametrize(
    "codecs, expected",
    [
        ("mp4a.40.2", MediaCodec.AAC),
        ("opus", MediaCodec.OPUS),
        ("mp3", MediaCodec.MP3),
        ("flac", MediaCodec.FLAC),
        ("vorbis", MediaCodec.VORBIS),
        ("unknown", None),
    ],
)
def test_audio_codec(codecs, expected):
    assert parse_audio_codec(codecs) == expected


def test_inv_url_prefix():
    assert parse_inv_url("/videoplayback?id=1", INSTANCE) == INSTANCE + "/videoplayback?id=1"
    absolute = INSTANCE + "/videoplayback?id=1"
    assert parse_inv_url(absolute, INSTANCE) == absolute


def test_normalize_instance():
    assert normalize_instance(INSTANCE + "/") == INSTANCE
    assert normalize_instance(INSTANCE) == INSTANCE


def test_normalize_instance_empty():
    with pytest.raises(ValueError):
        normalize_instance("")


def test_parse_formats():
    data = {
        "title": "Clip",
        "author": "Someone",
        "lengthSeconds": 42,
        "adaptiveFormats": [
            {
                "url": "/videoplayback?itag=137",
                "itag": "137",
                "type": 'video/mp4; codecs="avc1.640028"',
                "bitrate": "4000000",
                "size": "1920x1080",
            },
            {"url": "", "itag": "1", "type": 'video/mp4; codecs="avc1"'},
            {"url": "/x", "itag": "2", "type": "broken"},
            {
                "url": "/videoplayback?itag=251",
                "itag": "251",
                "type": 'audio/webm; codecs="opus"',
                "bitrate": "bad",
            },
        ],
    }
    formats = parse_inv_formats(data, INSTANCE)
    assert [f.format_id for f in formats] == ["137", "251"]
    video, audio = formats
    assert video.type == MediaType.VIDEO
    assert (video.width, video.height) == (1920, 1080)
    assert video.bitrate == 4000000
    assert video.duration == 42
    assert video.url == [INSTANCE + "/videoplayback?itag=137"]
    assert video.title == "Clip"
    assert video.artist == "Someone"
    assert video.download_config.chunk_size == 10 * 1024 * 1024
    assert audio.type == MediaType.AUDIO
    assert audio.bitrate == 0
    assert (audio.width, audio.height) == (0, 0)