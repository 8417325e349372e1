import re
import json

from livetv.codec import bytes_to_base64url, hex_to_bytes
from livetv.errors import InvalidKeyMaterial

# keyId:key, hex on both sides, optionally several separated by commas
HEX_PAIR_RE = re.compile(r'^[0-9a-fA-F]+:[0-9a-fA-F]+$')


def _split_pairs(license_string: str) -> list:
  return [pair.strip() for pair in (license_string or "").split(",")]


def is_clearkey_material(license_string: str) -> bool:
  """True for static `keyId:key[,keyId:key...]` hex material."""
  pairs = _split_pairs(license_string)
  return all(HEX_PAIR_RE.match(pair) for pair in pairs)


def parse_key_pairs(license_string: str) -> list:
  """Returns [(kid_bytes, key_bytes), ...]; raises InvalidKeyMaterial."""
  result = []
  for pair in _split_pairs(license_string):
    kid_hex, sep, key_hex = pair.partition(":")
    if not sep:
      raise InvalidKeyMaterial(f"expected keyId:key, got {pair!r}")
    result.append((hex_to_bytes(kid_hex), hex_to_bytes(key_hex)))
  return result


def build_clearkey_license(license_string: str) -> str:
  """
  Builds the ClearKey license document for `keyId:key` hex pairs:

    {"keys":[{"kty":"oct","k":"<key>","kid":"<keyId>"}],"type":"temporary"}

  with k and kid in unpadded base64url.
  """
  keys = [
    {"kty": "oct", "k": bytes_to_base64url(key), "kid": bytes_to_base64url(kid)}
    for kid, key in parse_key_pairs(license_string)
  ]
  return json.dumps({"keys": keys, "type": "temporary"}, separators=(',', ':'))
