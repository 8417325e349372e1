import re
import json

from livetv.config import DEFAULT_CHANNEL_NAME
from livetv.inline_params import DRM_LICENSE_KEY, DRM_SCHEME_KEY, HEADER_SYNONYMS, USER_AGENT_KEYS, parse_inline_params
from livetv.logger import log_debug, log_info, log_warning
from livetv.models import ORIGIN, REFERER, ParsedChannel, ParseResult, StreamMetadata

EXTM3U = "#EXTM3U"
EXTINF = "#EXTINF:"
VLC_USER_AGENT = "#EXTVLCOPT:http-user-agent="
VLC_ORIGIN = "#EXTVLCOPT:http-origin="
VLC_REFERRER = "#EXTVLCOPT:http-referrer="
EXTHTTP = "#EXTHTTP:"
KODI_LICENSE_TYPE = "#KODIPROP:inputstream.adaptive.license_type="
KODI_LICENSE_KEY = "#KODIPROP:inputstream.adaptive.license_key="

TAG = "m3u_parser"


def extract_attribute(line: str, name: str) -> str:
  """Value of `name="..."` on an #EXTINF line, or "" when absent."""
  match = re.search(re.escape(name) + r'="([^"]*)"', line)
  return match.group(1) if match else ""


def extract_channel_name(line: str) -> str:
  # Attribute values may contain commas, so the title follows the last one
  title_split = line.rsplit(",", 1)
  if len(title_split) > 1 and title_split[1].strip():
    return title_split[1].strip()
  return DEFAULT_CHANNEL_NAME


def header_name(key: str) -> str:
  """x-custom-header -> X-Custom-Header"""
  return "-".join(part[:1].upper() + part[1:] for part in key.split("-"))


class _EntryState:
  """Attributes collected from directive lines until the next URL line."""

  def __init__(self):
    self.name = ""
    self.logo = ""
    self.group = ""
    self.metadata = StreamMetadata()

  def emit(self, url_line: str) -> ParsedChannel:
    url, inline = parse_inline_params(url_line)
    return ParsedChannel.create(
      name=self.name,
      stream_url=url,
      metadata=self.metadata.merge(inline),
      logo_url=self.logo,
      group_title=self.group,
    )


def _apply_exthttp(state: _EntryState, payload: str):
  data = json.loads(payload)
  if not isinstance(data, dict):
    raise ValueError(f"expected a JSON object, got {type(data).__name__}")

  for key, value in data.items():
    value = (value if isinstance(value, str) else json.dumps(value)).strip()
    lowered = key.strip().lower()
    if not lowered:
      continue
    if lowered in USER_AGENT_KEYS:
      state.metadata.user_agent = value
    elif lowered == DRM_SCHEME_KEY:
      state.metadata.drm_scheme = value
    elif lowered == DRM_LICENSE_KEY:
      state.metadata.drm_license = value
    elif lowered in HEADER_SYNONYMS:
      # Cookie included: stored verbatim, never split on ';'
      state.metadata.headers[HEADER_SYNONYMS[lowered]] = value
    else:
      state.metadata.headers[header_name(key.strip())] = value


def _process_line(state: _EntryState, line: str, line_no: int, result: ParseResult) -> _EntryState:
  """Handles one stripped line and returns the state for the next one."""
  if not line or line.startswith(EXTM3U):
    return state

  if line.startswith(EXTINF):
    state.name = extract_channel_name(line)
    state.logo = extract_attribute(line, "tvg-logo")
    state.group = extract_attribute(line, "group-title")

  elif line.startswith(VLC_USER_AGENT):
    state.metadata.user_agent = line[len(VLC_USER_AGENT):].strip()

  elif line.startswith(VLC_ORIGIN):
    state.metadata.headers[ORIGIN] = line[len(VLC_ORIGIN):].strip()

  elif line.startswith(VLC_REFERRER):
    state.metadata.headers[REFERER] = line[len(VLC_REFERRER):].strip()

  elif line.startswith(EXTHTTP):
    try:
      _apply_exthttp(state, line[len(EXTHTTP):].strip())
    except (ValueError, RecursionError) as e:
      # json.JSONDecodeError is a ValueError too
      result.add_diagnostic("m3u", f"malformed #EXTHTTP: {e}", line_no)
      log_warning(TAG, f"Line {line_no}: ignoring malformed #EXTHTTP: {e}")

  elif line.startswith(KODI_LICENSE_TYPE):
    state.metadata.drm_scheme = line[len(KODI_LICENSE_TYPE):].strip()

  elif line.startswith(KODI_LICENSE_KEY):
    state.metadata.drm_license = line[len(KODI_LICENSE_KEY):].strip()

  elif line.startswith("#"):
    pass

  else:
    # URL line: emit if an #EXTINF came first, then start over
    if state.name:
      channel = state.emit(line)
      result.channels.append(channel)
      log_debug(TAG, f"Added channel: {channel.name}")
    else:
      result.add_diagnostic("m3u", "stream URL without #EXTINF dropped", line_no)
      log_warning(TAG, f"Line {line_no}: dropping URL without #EXTINF")
    return _EntryState()

  return state


def parse_m3u(content: str) -> ParseResult:
  """
  Parses extended-M3U text into channels.

  A missing #EXTM3U header is tolerated. Problems with single directives are
  recorded in the result's diagnostics and never abort the playlist.
  """
  result = ParseResult()
  content = (content or "").lstrip("\ufeff")
  if not content.strip():
    result.add_diagnostic("m3u", "empty playlist")
    log_warning(TAG, "Empty playlist")
    return result

  lines = content.splitlines()
  if not content.lstrip().startswith(EXTM3U):
    log_debug(TAG, "Playlist has no #EXTM3U header, parsing anyway")

  state = _EntryState()
  for line_no, line in enumerate(lines, start=1):
    state = _process_line(state, line.strip(), line_no, result)

  log_info(TAG, f"Parsed {len(result.channels)} channels from M3U")
  return result
