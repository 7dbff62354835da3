# mediaextract

Helpers for pulling downloadable media out of posts on social and
streaming sites, plus a self-contained signer for requests to the
TikTok mobile API.

The package is a library: it parses the responses those sites return
and turns them into a common model of media and formats.

## What it does not do

- It makes no network requests. Fetching pages, API responses and
  tokens is left to the caller; the functions here take the fetched
  text or decoded JSON.
- It has no command, bot or server, and it does not download or store
  media files.

## The common model

`mediaextract.media` holds the types the site modules produce:

- `MediaType` and `MediaCodec` — what a format carries and how it is encoded.
- `MediaFormat` — one downloadable variant (URLs, codecs, size, duration,
  bitrate, thumbnails, title, artist, download settings).
- `Media` — one item of a post, with its caption, NSFW flag and formats
  (`add_format`, `set_caption`).
- `Extractor` — a site description with its URL pattern and hosts;
  `match(url)` returns a `DownloadContext` when the pattern is found in
  the URL, else `None`, and `new_media(content_id, content_url)` starts
  a `Media`.
- `DownloadContext` — what matching found: the content id (the `id`
  group), the matched text and all named groups.

## Site modules

| Module | What it offers |
| --- | --- |
| `mediaextract.youtube` | Formats from an Invidious video response: `parse_inv_formats`, `parse_stream_type`, `parse_video_codec`, `parse_audio_codec`, `parse_inv_url`, `normalize_instance` |
| `mediaextract.soundcloud` | `resolve_url`, `thumbnail_url`, `find_client_id`, `pick_progressive_mp3` |
| `mediaextract.ninegag` | `find_best_photo`, `parse_video_formats` |
| `mediaextract.instagram` | `parse_gql_media`, `parse_embed_gql`, `build_igram_payload`, `parse_igram_response`, `cdn_url`, `build_gql_data` |
| `mediaextract.threads` | `parse_embed_media` for an embed page |
| `mediaextract.tiktok` | `app_version_code`, `build_post_data`, `build_api_query`, `random_install_time`, `random_udid`, `random_device_id`, `parse_play_addr`, `parse_universal_data`, and the `EXTRACTOR` and `VM_EXTRACTOR` URL patterns |
| `mediaextract.redgifs` | `Token` with `expired(now)`, `media_from_gif`, and the `EXTRACTOR` URL pattern |

Functions that find nothing usable raise `ValueError` with a short
message.

```python
from mediaextract.youtube import parse_stream_type

media_type, video_codec, audio_codec = parse_stream_type(
    'video/mp4; codecs="avc1.4d401f"'
)
# MediaType.VIDEO, MediaCodec.AVC, None
```

```python
from mediaextract.tiktok import EXTRACTOR

ctx = EXTRACTOR.match("https://www.tiktok.com/@someone/video/1234567890")
ctx.matched_content_id   # '1234567890'
```

## The request signer

`mediaextract.signer.sign.sign(params, payload)` returns the signature
headers for a request: `X-Gorgon`, `X-Khronos`, `X-Ss-Req-Ticket`,
`X-Ladon`, `X-Argus`, and for a non-empty payload `X-Ss-Stub` and
`Content-length`. The parameters must carry the app id under `aid`,
otherwise `ValueError` is raised. `encode_params` gives the sorted,
form-escaped query string.

```python
from mediaextract.signer.sign import sign

headers = sign({"aid": "1233", "device_id": "1234"}, "aweme_id=1&request_source=0")
```

The building blocks are usable on their own:

- `mediaextract.signer.padding` — `pkcs7_pad`, `padding_size`
- `mediaextract.signer.sm3` — `sm3_hash`, `body_hash`, `query_hash`
- `mediaextract.signer.simon` — `expand_key`, `simon_encrypt`, `simon_decrypt`
- `mediaextract.signer.proto` — a minimal protobuf reader and writer
  (`ProtoBuf`, `ProtoField`, `FieldType`, `ProtoError`)
- `mediaextract.signer.gorgon` — `Gorgon`, `rbit`, `swap_nibbles`
- `mediaextract.signer.ladon` — `new_ladon`, `encrypt_ladon`
- `mediaextract.signer.argus` — `new_argus`, `encrypt_argus`

```python
from mediaextract.signer.proto import ProtoBuf
from mediaextract.signer.sm3 import sm3_hash

digest = sm3_hash(b"abc")          # 32 bytes
encoded = ProtoBuf({1: 150, 2: "hi"}).to_bytes()
decoded = ProtoBuf(encoded)
decoded.get_int(1)                 # 150
decoded.get_utf8(2)                # 'hi'
```

## Debug dumps

`mediaextract.debugdump` sets up logging to standard output
(`setup_logging`, `set_level`, which raises `ValueError` for an unknown
level name). Once enabled with `set_log_file(True)`,
`write_file(name, content)` saves bytes, text, a response-like object
or a JSON-serialisable value in the working directory: as indented
`.json` when the content is JSON, otherwise as `.txt`. It returns the
written path, or `None` when dumps are off or writing failed.