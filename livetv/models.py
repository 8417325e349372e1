from enum import Enum

from livetv.config import DEFAULT_CHANNEL_NAME, PLACEHOLDER_LOGO_URL

USER_AGENT = "User-Agent"
REFERER = "Referer"
ORIGIN = "Origin"
COOKIE = "Cookie"


class PlaylistFormat(Enum):
  M3U = "m3u"
  JSON = "json"


class StreamMetadata:
  """
  Request headers and DRM parameters of one stream.

  The user agent is kept apart from `headers` so that it can be written
  first in a descriptor; `request_headers()` puts them back together.
  The Cookie header is one opaque string and is never split.
  """

  def __init__(self, user_agent=None, headers=None, drm_scheme=None, drm_license=None):
    self.user_agent = user_agent
    self.headers = dict(headers or {})
    self.drm_scheme = drm_scheme
    self.drm_license = drm_license

  def merge(self, other: "StreamMetadata") -> "StreamMetadata":
    """Returns a copy of self overlaid with every field `other` sets."""
    headers = dict(self.headers)
    headers.update(other.headers)
    return StreamMetadata(
      user_agent=other.user_agent if other.user_agent is not None else self.user_agent,
      headers=headers,
      drm_scheme=other.drm_scheme if other.drm_scheme is not None else self.drm_scheme,
      drm_license=other.drm_license if other.drm_license is not None else self.drm_license,
    )

  def request_headers(self) -> dict:
    """Every HTTP header to send, User-Agent first."""
    result = {}
    if self.user_agent is not None:
      result[USER_AGENT] = self.user_agent
    result.update(self.headers)
    return result

  def has_drm(self) -> bool:
    return bool(self.drm_scheme or self.drm_license)

  def is_empty(self) -> bool:
    return self.user_agent is None and not self.headers and not self.has_drm()

  def __eq__(self, other):
    if not isinstance(other, StreamMetadata):
      return NotImplemented
    return (
      self.user_agent == other.user_agent
      and self.headers == other.headers
      and self.drm_scheme == other.drm_scheme
      and self.drm_license == other.drm_license
    )

  def __repr__(self):
    return (
      f"StreamMetadata(user_agent={self.user_agent!r}, headers={self.headers!r}, "
      f"drm_scheme={self.drm_scheme!r}, drm_license={self.drm_license!r})"
    )


class ParsedChannel:
  def __init__(self):
    self.name = ""
    self.logo_url = ""
    self.group_title = ""
    self.stream_url = ""
    self.user_agent = None
    self.headers = {}
    self.drm_scheme = None
    self.drm_license = None

  @staticmethod
  def create(name, stream_url, metadata=None, logo_url="", group_title=""):
    item = ParsedChannel()
    item.name = name or DEFAULT_CHANNEL_NAME
    item.stream_url = stream_url
    item.logo_url = logo_url or ""
    item.group_title = group_title or ""
    if metadata is not None:
      item.user_agent = metadata.user_agent
      item.headers = dict(metadata.headers)
      item.drm_scheme = metadata.drm_scheme
      item.drm_license = metadata.drm_license
    return item

  def metadata(self) -> StreamMetadata:
    return StreamMetadata(self.user_agent, self.headers, self.drm_scheme, self.drm_license)

  def to_dict(self) -> dict:
    """Returns the dictionary representation of this object"""
    data = dict(self.__dict__)
    data["headers"] = dict(self.headers)
    return data

  def __eq__(self, other):
    if not isinstance(other, ParsedChannel):
      return NotImplemented
    return self.to_dict() == other.to_dict()

  def __repr__(self):
    return f"ParsedChannel(name={self.name!r}, stream_url={self.stream_url!r})"


class Channel:
  """Catalog record handed over to the storage layer."""

  def __init__(self, id, name, logo_url, stream_url, category_id="", category_name=""):
    self.id = id
    self.name = name
    self.logo_url = logo_url
    self.stream_url = stream_url
    self.category_id = category_id
    self.category_name = category_name

  def to_dict(self) -> dict:
    return dict(self.__dict__)

  def __repr__(self):
    return f"Channel(id={self.id!r}, name={self.name!r})"


def placeholder_logo(name: str) -> str:
  return PLACEHOLDER_LOGO_URL.format(initials=name[:2])


class Diagnostic:
  def __init__(self, source: str, message: str, line=None):
    self.source = source
    self.message = message
    self.line = line

  def __str__(self):
    if self.line is None:
      return f"{self.source}: {self.message}"
    return f"{self.source}:{self.line}: {self.message}"

  def __repr__(self):
    return f"Diagnostic({self.source!r}, {self.message!r}, line={self.line!r})"


class ParseResult:
  """Parsed channels plus whatever went wrong along the way."""

  def __init__(self, channels=None, diagnostics=None):
    self.channels: list[ParsedChannel] = list(channels or [])
    self.diagnostics: list[Diagnostic] = list(diagnostics or [])

  def add_diagnostic(self, source: str, message: str, line=None) -> Diagnostic:
    diagnostic = Diagnostic(source, message, line)
    self.diagnostics.append(diagnostic)
    return diagnostic

  def __iter__(self):
    return iter(self.channels)

  def __len__(self):
    return len(self.channels)

  def __bool__(self):
    return bool(self.channels)

  def __repr__(self):
    return f"ParseResult(channels={len(self.channels)}, diagnostics={len(self.diagnostics)})"
