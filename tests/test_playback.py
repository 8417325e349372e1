import json

import pytest

from livetv.descriptor import encode_descriptor
from livetv.m3u_parser import parse_m3u
from livetv.playback import manifest_type, normalize_drm_scheme, prepare_playback

KID = "00112233445566778899aabbccddeeff"
KEY = "ffeeddccbbaa99887766554433221100"


@pytest.mark.parametrize("value, expected", [
  ("clearkey", "clearkey"),
  ("ClearKey", "clearkey"),
  ("org.w3.clearkey", "clearkey"),
  ("WIDEVINE", "widevine"),
  ("com.widevine.alpha", "widevine"),
  ("com.microsoft.playready", "playready"),
  ("fairplay", None),
  ("", None),
  (None, None),
])
def test_normalize_drm_scheme(value, expected):
  assert normalize_drm_scheme(value) == expected


def test_manifest_type():
  assert manifest_type("https://a/b/manifest.mpd?x=1") == "mpd"
  assert manifest_type("http://a/index.M3U8") == "hls"
  assert manifest_type("http://a/stream.ts") is None


def test_static_clearkey_from_playlist(sample_m3u):
  sports = parse_m3u(sample_m3u).channels[1]
  request = prepare_playback(encode_descriptor(sports))
  assert request.url == "https://cdn.example/sports/manifest.mpd"
  assert request.manifest_type == "mpd"
  assert request.headers["Cookie"] == "a=1; b=2; path=/"
  assert request.drm.scheme == "clearkey"
  assert request.drm.license_url is None
  document = json.loads(request.drm.license_document)
  assert document["keys"] == [{"kty": "oct", "k": "_-7dzLuqmYh3ZlVEMyIRAA", "kid": "ABEiM0RVZneImaq7zN3u_w"}]
  assert request.drm_usable


def test_headers_put_user_agent_first():
  request = prepare_playback("http://a/x.m3u8|Referer=https://r/|User-Agent=UA")
  assert list(request.headers) == ["User-Agent", "Referer"]
  assert request.drm is None
  assert request.diagnostics == []


def test_license_server_url_is_passed_through():
  request = prepare_playback("http://a/x.mpd|drmScheme=com.widevine.alpha|drmLicense=https://lic.example/wv")
  assert request.drm.scheme == "widevine"
  assert request.drm.license_url == "https://lic.example/wv"
  assert request.drm.license_document is None


def test_clearkey_via_license_server():
  request = prepare_playback("http://a/x.mpd|drmScheme=clearkey|drmLicense=https://lic.example/ck")
  assert request.drm.scheme == "clearkey"
  assert request.drm.license_url == "https://lic.example/ck"


def test_bare_key_material_implies_clearkey():
  request = prepare_playback(f"http://a/x.mpd|drmLicense={KID}:{KEY}")
  assert request.drm.scheme == "clearkey"
  assert request.drm.license_document


def test_bad_key_material_makes_drm_unusable():
  request = prepare_playback(f"http://a/x.mpd|drmScheme=clearkey|drmLicense={KID}:{KEY[:-1]}")
  assert request.url == "http://a/x.mpd"
  assert request.drm is None
  assert not request.drm_usable
  assert request.diagnostics[0].source == "drm"


def test_unknown_scheme():
  request = prepare_playback("http://a/x.mpd|drmScheme=fairplay|drmLicense=https://lic")
  assert request.drm is None
  assert not request.drm_usable


def test_widevine_without_server():
  request = prepare_playback(f"http://a/x.mpd|drmScheme=widevine|drmLicense={KID}:{KEY}")
  assert request.drm is None
  assert not request.drm_usable


def test_legacy_query_drm():
  request = prepare_playback(f"http://a/x.mpd?drmScheme=clearkey&drmLicense={KID}:{KEY}")
  assert request.drm.scheme == "clearkey"


def test_empty_descriptor_does_not_raise():
  request = prepare_playback("")
  assert request.url == ""
  assert request.drm is None
  assert request.diagnostics[0].source == "descriptor"
