import hashlib
import zlib

from livetv.config import ID_FALLBACK_PREFIX
from livetv.logger import log_warning


def generate_channel_id(stream_url: str, name: str) -> str:
  """
  Deterministic channel id: hex MD5 of "<stream_url>|<name>".

  Keeps favorites and watch state attached to a channel across re-fetches
  of the same playlist.
  """
  combined = f"{stream_url}|{name}".encode("utf-8")
  try:
    return hashlib.md5(combined).hexdigest()
  except ValueError as e:
    # FIPS builds may refuse MD5
    log_warning("ids", f"MD5 unavailable, using CRC32 id: {e}")
    return f"{ID_FALLBACK_PREFIX}{zlib.crc32(combined):08x}"
