import json

from livetv.config import DEFAULT_CHANNEL_NAME
from livetv.logger import log_debug, log_info, log_warning
from livetv.models import COOKIE, ORIGIN, REFERER, ParsedChannel, ParseResult, StreamMetadata

TAG = "json_parser"


def _field(item: dict, key: str):
  """String value of `key`, or None when missing, null or empty."""
  value = item.get(key)
  if value is None:
    return None
  if not isinstance(value, str):
    value = json.dumps(value)
  return value.strip() or None


def _parse_item(item: dict) -> ParsedChannel:
  metadata = StreamMetadata(user_agent=_field(item, "user-agent"))

  cookie = _field(item, "cookie")
  if cookie:
    # One opaque Cookie header
    metadata.headers[COOKIE] = cookie
  referer = _field(item, "referer")
  if referer:
    metadata.headers[REFERER] = referer
  origin = _field(item, "origin")
  if origin:
    metadata.headers[ORIGIN] = origin

  return ParsedChannel.create(
    name=_field(item, "name") or DEFAULT_CHANNEL_NAME,
    stream_url=_field(item, "link").strip(),
    metadata=metadata,
    logo_url=_field(item, "logo") or "",
  )


def parse_json_playlist(content: str) -> ParseResult:
  """
  Parses a JSON array of flat channel objects:
  [{"name": ..., "link": ..., "logo": ..., "cookie": ..., "user-agent": ...,
    "referer": ..., "origin": ...}, ...]

  Entries without a link, or that are not objects, are skipped.
  """
  result = ParseResult()
  try:
    data = json.loads((content or "").lstrip("\ufeff"))
  except (TypeError, ValueError, RecursionError) as e:
    result.add_diagnostic("json", f"invalid JSON playlist: {e}")
    log_warning(TAG, f"Error parsing JSON playlist: {e}")
    return result

  if not isinstance(data, list):
    result.add_diagnostic("json", f"expected a JSON array, got {type(data).__name__}")
    log_warning(TAG, "JSON playlist is not an array")
    return result

  for index, item in enumerate(data):
    if not isinstance(item, dict):
      result.add_diagnostic("json", "entry is not an object", index)
      continue
    if not (_field(item, "link") or "").strip():
      result.add_diagnostic("json", "entry without link skipped", index)
      continue
    channel = _parse_item(item)
    result.channels.append(channel)
    log_debug(TAG, f"Parsed JSON channel: {channel.name}")

  log_info(TAG, f"Parsed {len(result.channels)} channels from JSON playlist")
  return result
