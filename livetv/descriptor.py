"""
Channel descriptors: the single string persisted per channel.

  <stream url>|User-Agent=...|<Header>=<value>...|drmScheme=...|drmLicense=...

It uses the same syntax as inline playlist parameters, so decoding is done
by `parse_inline_params`. There is no escaping: a '|' in any key or value,
or a '=' in a key, cannot be represented and is refused on encode.
"""
from urllib.parse import parse_qsl, urlsplit

from livetv.errors import DescriptorError
from livetv.inline_params import DRM_LICENSE_KEY, DRM_SCHEME_KEY, parse_inline_params
from livetv.logger import log_debug
from livetv.models import USER_AGENT, StreamMetadata

SEPARATOR = "|"
DRM_SCHEME_PARAM = "drmScheme"
DRM_LICENSE_PARAM = "drmLicense"

TAG = "descriptor"


def _segment(key: str, value: str) -> str:
  if SEPARATOR in key or "=" in key:
    raise DescriptorError(f"header name {key!r} cannot be encoded")
  if SEPARATOR in value:
    raise DescriptorError(f"value of {key!r} contains '{SEPARATOR}'")
  return f"{key}={value}"


def encode_descriptor(channel_or_url, metadata: StreamMetadata = None) -> str:
  """
  Builds the descriptor of a ParsedChannel, or of a url + StreamMetadata.

  Raises DescriptorError when a key or value cannot be written unambiguously.
  """
  if metadata is None:
    url = channel_or_url.stream_url
    metadata = channel_or_url.metadata()
  else:
    url = channel_or_url

  if SEPARATOR in url:
    raise DescriptorError(f"stream url contains '{SEPARATOR}': {url}")

  parts = [url]
  if metadata.user_agent is not None:
    parts.append(_segment(USER_AGENT, metadata.user_agent))
  for key, value in metadata.headers.items():
    parts.append(_segment(key, value))
  if metadata.drm_scheme is not None:
    parts.append(_segment(DRM_SCHEME_PARAM, metadata.drm_scheme))
  if metadata.drm_license is not None:
    parts.append(_segment(DRM_LICENSE_PARAM, metadata.drm_license))
  return SEPARATOR.join(parts)


def _query_drm_params(url: str) -> dict:
  try:
    query = urlsplit(url).query
  except ValueError:
    return {}
  found = {}
  for key, value in parse_qsl(query, keep_blank_values=True):
    lowered = key.lower()
    if lowered in (DRM_SCHEME_KEY, DRM_LICENSE_KEY) and lowered not in found:
      found[lowered] = value
  return found


def decode_descriptor(descriptor: str):
  """
  Splits a descriptor back into (url, StreamMetadata).

  DRM values carried as `?drmScheme=...&drmLicense=...` in the url are used
  only where the pipe segments did not set them. The url is left as is.
  """
  url, metadata = parse_inline_params(descriptor or "")

  if metadata.drm_scheme is None or metadata.drm_license is None:
    legacy = _query_drm_params(url)
    if metadata.drm_scheme is None and DRM_SCHEME_KEY in legacy:
      metadata.drm_scheme = legacy[DRM_SCHEME_KEY]
    if metadata.drm_license is None and DRM_LICENSE_KEY in legacy:
      metadata.drm_license = legacy[DRM_LICENSE_KEY]
    if legacy:
      log_debug(TAG, f"Using DRM query parameters from {url}")

  return url, metadata
