from livetv.descriptor import encode_descriptor
from livetv.errors import DescriptorError, FetchError
from livetv.ids import generate_channel_id
from livetv.json_parser import parse_json_playlist
from livetv.logger import log_error, log_info, log_warning
from livetv.m3u_parser import parse_m3u
from livetv.models import Channel, ParseResult, PlaylistFormat, placeholder_logo
from livetv.req import fetch_url

TAG = "providers"


def detect_format(text: str) -> PlaylistFormat:
  """JSON when the first significant character opens an array or object."""
  stripped = (text or "").lstrip("\ufeff \t\r\n")
  if stripped[:1] in ("[", "{"):
    return PlaylistFormat.JSON
  return PlaylistFormat.M3U


def parse_playlist(text: str) -> ParseResult:
  if detect_format(text) is PlaylistFormat.JSON:
    log_info(TAG, "Detected JSON format playlist")
    return parse_json_playlist(text)
  return parse_m3u(text)


def _is_url(source: str) -> bool:
  return source.lower().startswith(("http://", "https://")) and "\n" not in source


class PlaylistLoader:
  """
  Turns a playlist source (URL, M3U text or JSON text) into channels.

  Holds no state besides the injected `fetch` callable, which takes a URL
  and returns the body or raises FetchError.
  """

  def __init__(self, fetch=fetch_url):
    self.fetch = fetch

  def load(self, source: str) -> ParseResult:
    source = (source or "").strip()
    if not source:
      result = ParseResult()
      result.add_diagnostic("fetch", "empty playlist source")
      return result

    if detect_format(source) is PlaylistFormat.JSON or not _is_url(source):
      return parse_playlist(source)

    log_info(TAG, f"Fetching playlist {source}")
    try:
      content = self.fetch(source)
    except FetchError as e:
      log_error(TAG, f"Failed to fetch playlist: {e}")
      result = ParseResult()
      result.add_diagnostic("fetch", str(e))
      return result

    # The body decides the format, whatever the URL extension says
    return parse_playlist(content)


def to_catalog_entries(channels) -> list:
  """[(stable id, ParsedChannel), ...]"""
  return [(generate_channel_id(ch.stream_url, ch.name), ch) for ch in channels]


def convert_to_channels(channels, category_id: str, category_name: str) -> list[Channel]:
  """
  Builds catalog records whose stream_url is the channel descriptor.
  Channels that cannot be encoded are skipped.
  """
  result = []
  for channel_id, ch in to_catalog_entries(channels):
    try:
      descriptor = encode_descriptor(ch)
    except DescriptorError as e:
      log_warning(TAG, f"Skipping channel {ch.name}: {e}")
      continue
    result.append(Channel(
      id=channel_id,
      name=ch.name,
      logo_url=ch.logo_url or placeholder_logo(ch.name),
      stream_url=descriptor,
      category_id=category_id,
      category_name=category_name,
    ))
  return result


def get_channels(source: str, category_id: str = "", category_name: str = "", fetch=fetch_url) -> list[Channel]:
  """
  Fetches channels for a playlist source as catalog records.
  """
  result = PlaylistLoader(fetch=fetch).load(source)
  for diagnostic in result.diagnostics:
    log_warning(TAG, str(diagnostic))
  channels = convert_to_channels(result.channels, category_id, category_name)
  log_info(TAG, f"Fetched {len(channels)} channels from {(source or '')[:80]}")
  return channels
