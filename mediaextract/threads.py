"""Media extraction from embedded thread post pages."""

from typing import List, Union

from bs4 import BeautifulSoup

from .media import DownloadContext, Media, MediaCodec, MediaFormat, MediaType

HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "Accept-Language": "en-GB,en;q=0.9",
    "Cache-Control": "max-age=0",
    "Dnt": "1",
    "Priority": "u=0, i",
    "Sec-Ch-Ua": 'Chromium";v="124", "Google Chrome";v="124", "Not-A.Brand";v="99',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": "macOS",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
}


def parse_embed_media(ctx: DownloadContext, body: Union[str, bytes]) -> List[Media]:
    """Videos then images of each media container, captioned with the post text."""
    doc = BeautifulSoup(body, "html.parser")
    content_id = ctx.matched_content_id
    content_url = ctx.matched_content_url

    caption = ""
    for container in doc.select(".BodyTextContainer"):
        caption = container.get_text()

    def new_media(fmt: MediaFormat) -> Media:
        media = ctx.extractor.new_media(content_id, content_url)
        media.set_caption(caption)
        media.add_format(fmt)
        return media

    media_list = []
    for container in doc.select(".MediaContainer, .SoloMediaContainer"):
        for video in container.find_all("video"):
            sources = video.find_all("source")
            if sources and sources[0].has_attr("src"):
                media_list.append(new_media(MediaFormat(
                    format_id="video",
                    type=MediaType.VIDEO,
                    url=[sources[0]["src"]],
                    video_codec=MediaCodec.AVC,
                    audio_codec=MediaCodec.AAC,
                )))
        for img in container.find_all("img"):
            if img.has_attr("src"):
                media_list.append(new_media(MediaFormat(
                    format_id="image",
                    type=MediaType.PHOTO,
                    url=[img["src"]],
                )))
    return media_list