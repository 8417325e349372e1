from livetv.models import COOKIE, ORIGIN, REFERER, StreamMetadata

# Lower-cased key -> header name. Keys outside this table keep their case.
HEADER_SYNONYMS = {
  "referer": REFERER,
  "referrer": REFERER,
  "origin": ORIGIN,
  "cookie": COOKIE,
}
USER_AGENT_KEYS = ("user-agent", "useragent")
DRM_SCHEME_KEY = "drmscheme"
DRM_LICENSE_KEY = "drmlicense"


def parse_inline_params(line: str):
  """
  Splits `url|k1=v1|k2=v2` into the bare url and its StreamMetadata.

  Each segment is split on its first '='. Segments without one, or with an
  empty key, are ignored. Cookie values are kept whole.
  """
  parts = (line or "").split("|")
  url = parts[0].strip()
  metadata = StreamMetadata()

  for part in parts[1:]:
    key, sep, value = part.strip().partition("=")
    key = key.strip()
    if not sep or not key:
      continue
    value = value.strip()

    lowered = key.lower()
    if lowered in USER_AGENT_KEYS:
      metadata.user_agent = value
    elif lowered == DRM_SCHEME_KEY:
      metadata.drm_scheme = value
    elif lowered == DRM_LICENSE_KEY:
      metadata.drm_license = value
    elif lowered in HEADER_SYNONYMS:
      metadata.headers[HEADER_SYNONYMS[lowered]] = value
    else:
      metadata.headers[key] = value

  return url, metadata
