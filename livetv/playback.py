from urllib.parse import urlsplit

from livetv.clearkey import build_clearkey_license, is_clearkey_material
from livetv.descriptor import decode_descriptor
from livetv.errors import InvalidKeyMaterial
from livetv.logger import log_error, log_warning
from livetv.models import Diagnostic

CLEARKEY = "clearkey"
WIDEVINE = "widevine"
PLAYREADY = "playready"

DRM_SCHEME_ALIASES = {
  "clearkey": CLEARKEY,
  "org.w3.clearkey": CLEARKEY,
  "widevine": WIDEVINE,
  "com.widevine.alpha": WIDEVINE,
  "playready": PLAYREADY,
  "com.microsoft.playready": PLAYREADY,
}

TAG = "playback"


def normalize_drm_scheme(value):
  """Maps a license type to clearkey/widevine/playready, or None."""
  if not value:
    return None
  return DRM_SCHEME_ALIASES.get(value.strip().lower())


def manifest_type(url: str):
  try:
    path = urlsplit(url).path.lower()
  except ValueError:
    return None
  if path.endswith(".mpd"):
    return "mpd"
  if path.endswith((".m3u8", ".m3u")):
    return "hls"
  return None


class DrmConfig:
  def __init__(self, scheme: str, license_url=None, license_document=None):
    self.scheme = scheme
    self.license_url = license_url
    self.license_document = license_document

  def __repr__(self):
    return f"DrmConfig(scheme={self.scheme!r}, license_url={self.license_url!r})"


class PlaybackRequest:
  """Everything a player needs to open one channel."""

  def __init__(self, url, headers, manifest_type=None, drm=None, diagnostics=None):
    self.url = url
    self.headers = headers
    self.manifest_type = manifest_type
    self.drm = drm
    self.diagnostics = list(diagnostics or [])

  @property
  def drm_usable(self) -> bool:
    return not any(d.source == "drm" for d in self.diagnostics)


def _resolve_drm(metadata, diagnostics: list):
  license_string = (metadata.drm_license or "").strip()
  scheme = normalize_drm_scheme(metadata.drm_scheme)

  if metadata.drm_scheme and scheme is None:
    diagnostics.append(Diagnostic("drm", f"unsupported DRM scheme {metadata.drm_scheme!r}"))
    return None
  if scheme is None:
    # A bare keyId:key license implies ClearKey
    if license_string and is_clearkey_material(license_string):
      scheme = CLEARKEY
    elif license_string:
      diagnostics.append(Diagnostic("drm", "DRM license given without a scheme"))
      return None
    else:
      return None

  if license_string.lower().startswith(("http://", "https://")):
    return DrmConfig(scheme, license_url=license_string)

  if scheme != CLEARKEY:
    diagnostics.append(Diagnostic("drm", f"{scheme} needs a license server URL"))
    return None

  try:
    return DrmConfig(scheme, license_document=build_clearkey_license(license_string))
  except InvalidKeyMaterial as e:
    diagnostics.append(Diagnostic("drm", f"invalid ClearKey material: {e}"))
    return None


def prepare_playback(descriptor: str) -> PlaybackRequest:
  """
  Resolves a stored descriptor into url, request headers and DRM setup.

  A channel whose DRM cannot be set up comes back with `drm` None and a
  "drm" diagnostic; this never raises.
  """
  url, metadata = decode_descriptor(descriptor)
  diagnostics = []
  drm = _resolve_drm(metadata, diagnostics)
  for diagnostic in diagnostics:
    log_warning(TAG, f"{diagnostic.message} ({url})")
  if not url:
    log_error(TAG, "Descriptor has no stream url")
    diagnostics.append(Diagnostic("descriptor", "missing stream url"))

  return PlaybackRequest(
    url=url,
    headers=metadata.request_headers(),
    manifest_type=manifest_type(url),
    drm=drm,
    diagnostics=diagnostics,
  )
