class LiveTvError(Exception):
  """Base class for every error raised by livetv."""


class FetchError(LiveTvError):
  """The playlist could not be retrieved (network, timeout, non-2xx)."""

  def __init__(self, url: str, reason: str, status_code=None):
    super().__init__(f"{reason} ({url})")
    self.url = url
    self.reason = reason
    self.status_code = status_code


class DescriptorError(LiveTvError, ValueError):
  """A channel cannot be written as a pipe-delimited descriptor."""


class InvalidKeyMaterial(LiveTvError, ValueError):
  """Hex key/keyId material is empty, odd-length or not hex."""
