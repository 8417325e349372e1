import base64
import binascii
import re

from livetv.errors import InvalidKeyMaterial

HEX_RE = re.compile(r'^[0-9a-fA-F]+$')


def hex_to_bytes(value: str) -> bytes:
  """Decodes a hex string (any case) into raw bytes."""
  clean_hex = (value or "").strip()
  if not clean_hex:
    raise InvalidKeyMaterial("empty hex string")
  if len(clean_hex) % 2:
    raise InvalidKeyMaterial(f"odd-length hex string: {clean_hex!r}")
  if not HEX_RE.match(clean_hex):
    raise InvalidKeyMaterial(f"non-hex character in {clean_hex!r}")
  return binascii.unhexlify(clean_hex)


def bytes_to_base64url(data: bytes) -> str:
  """URL-safe base64 with the '=' padding stripped."""
  return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def hex_to_base64url(value: str) -> str:
  return bytes_to_base64url(hex_to_bytes(value))


def base64url_to_bytes(value: str) -> bytes:
  clean_base64 = (value or "").strip()
  # restore the padding removed on encode
  clean_base64 += "=" * (-len(clean_base64) % 4)
  try:
    return base64.urlsafe_b64decode(clean_base64)
  except (binascii.Error, ValueError) as e:
    raise InvalidKeyMaterial(f"invalid base64url string {value!r}: {e}") from e
