import pytest

from mediaextract.media import (
    DownloadContext,
    Extractor,
    Media,
    MediaFormat,
    MediaType,
)

YOUTUBE_PATTERN = (
    r"(?:https?:)?(?:\/\/)?(?:(?:www|m)\.)?(?:youtube(?:-nocookie)?\.com\/"
    r"(?:(?:watch\?(?:.*&)?v=)|(?:embed\/)|(?:v\/)|(?:shorts\/))|youtu\.be\/)"
    r"(?P<id>[\w-]{11})(?:[?&].*)?"
)

SOUNDCLOUD_PATTERN = (
    r"(?i)^(?:https?://)?(?:(?:www\.|m\.)?soundcloud\.com/(?P<uploader>[\w\d-]+)/"
    r"(?P<id>[\w\d-]+)(?:/(?P<token>[^/?#]+))?(?:[?].*)?$|api(?:-v2)?\.soundcloud\.com/"
    r"tracks/(?P<track_id>\d+)(?:/?\?secret_token=(?P<secret_token>[^&]+))?)"
)


@pytest.fixture
def youtube():
    return Extractor(
        name="YouTube",
        code_name="youtube",
        url_pattern=YOUTUBE_PATTERN,
        host=["youtube", "youtu"],
    )


def test_match_extracts_id(youtube):
    ctx = youtube.match("https://www.youtube.com/watch?v=abcdefghijk")
    assert isinstance(ctx, DownloadContext)
    assert ctx.matched_content_id == "abcdefghijk"
    assert ctx.matched_groups["id"] == "abcdefghijk"
    assert ctx.extractor is youtube


def test_match_records_whole_match(youtube):
    url = "https://youtu.be/abcdefghijk"
    ctx = youtube.match(url)
    assert ctx.matched_content_url == url
    assert ctx.matched_groups["match"] == url


def test_match_returns_none_on_miss(youtube):
    assert youtube.match("https://example.com/video") is None


def test_unmatched_optional_groups_are_empty():
    extractor = Extractor(
        name="SoundCloud", code_name="soundcloud", url_pattern=SOUNDCLOUD_PATTERN
    )
    ctx = extractor.match("https://soundcloud.com/artist/some-track")
    assert ctx.matched_groups["uploader"] == "artist"
    assert ctx.matched_groups["id"] == "some-track"
    assert ctx.matched_groups["token"] == ""
    assert ctx.matched_groups["track_id"] == ""


def test_new_media_carries_ids(youtube):
    media = youtube.new_media("abcdefghijk", "https://youtu.be/abcdefghijk")
    assert media.content_id == "abcdefghijk"
    assert media.content_url == "https://youtu.be/abcdefghijk"
    assert media.extractor_code_name == "youtube"
    assert media.formats == []


def test_add_format_and_caption():
    media = Media("1", "https://example.com/1")
    first = MediaFormat(format_id="a", type=MediaType.PHOTO, url=["https://example.com/a"])
    second = MediaFormat(format_id="b", type=MediaType.VIDEO, url=["https://example.com/b"])
    media.add_format(first)
    media.add_format(second)
    media.set_caption("hello")
    assert [f.format_id for f in media.formats] == ["a", "b"]
    assert media.caption == "hello"