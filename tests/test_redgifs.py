from mediaextract.media import MediaCodec, MediaType
from mediaextract.redgifs import EXTRACTOR, TOKEN_LIFETIME, Token, media_from_gif


def _ctx():
    return EXTRACTOR.match("https://www.redgifs.com/watch/happyclip")


def _gif(**overrides):
    gif = {
        "description": "a clip",
        "duration": 12.7,
        "hasAudio": True,
        "width": 1920,
        "height": 1080,
        "urls": {
            "sd": "https://media.example.com/clip-mobile.mp4",
            "hd": "https://media.example.com/clip.mp4",
            "poster": "https://media.example.com/clip-poster.jpg",
            "thumbnail": "https://media.example.com/clip-thumb.jpg",
        },
    }
    gif.update(overrides)
    return gif


def test_extractor_matches_id():
    assert _ctx().matched_content_id == "happyclip"


def test_token_expiry():
    token = Token(access_token="token", agent="agent", expires_in=1000 + TOKEN_LIFETIME)
    assert not token.expired(1000)
    assert token.expired(1000 + TOKEN_LIFETIME)
    assert token.expired(2000 + TOKEN_LIFETIME)


def test_media_from_gif_full():
    media = media_from_gif(_ctx(), _gif())
    assert media.nsfw is True
    assert media.caption == "a clip"
    assert media.content_id == "happyclip"
    assert [f.format_id for f in media.formats] == ["sd", "hd"]
    sd, hd = media.formats
    assert sd.url == ["https://media.example.com/clip-mobile.mp4"]
    assert (hd.width, hd.height) == (1920, 1080)
    assert sd.width * 2 == hd.width and sd.height * 2 == hd.height
    for fmt in media.formats:
        assert fmt.type == MediaType.VIDEO
        assert fmt.video_codec == MediaCodec.AVC
        assert fmt.audio_codec == MediaCodec.AAC
        assert fmt.duration == 12
        assert fmt.thumbnail == [
            "https://media.example.com/clip-poster.jpg",
            "https://media.example.com/clip-thumb.jpg",
        ]


def test_media_from_gif_without_audio_or_description():
    media = media_from_gif(_ctx(), _gif(hasAudio=False, description=""))
    assert media.caption == ""
    assert all(f.audio_codec is None for f in media.formats)


def test_media_from_gif_without_poster_leaves_thumbnails_empty():
    gif = _gif(urls={"hd": "https://media.example.com/clip.mp4"})
    media = media_from_gif(_ctx(), gif)
    assert [f.format_id for f in media.formats] == ["hd"]
    assert media.formats[0].thumbnail == []
    assert media.formats[0].duration == 0


def test_media_from_gif_poster_only_thumbnail():
    gif = _gif(urls={"sd": "https://media.example.com/s.mp4", "poster": "https://media.example.com/p.jpg"})
    media = media_from_gif(_ctx(), gif)
    assert media.formats[0].thumbnail == ["https://media.example.com/p.jpg"]


def test_media_from_gif_no_urls():
    media = media_from_gif(_ctx(), _gif(urls={}))
    assert media.formats == []
    assert media.nsfw is True