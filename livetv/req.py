import requests

from livetv.config import CLIENT_USER_AGENT, CONNECT_TIMEOUT, READ_TIMEOUT
from livetv.errors import FetchError
from livetv.logger import log_debug

default_headers = {
  "User-Agent": CLIENT_USER_AGENT,
}


def decode_body(response) -> str:
  """
  Body as text. Without a charset in Content-Type the body is read as UTF-8,
  not the ISO-8859-1 requests assumes for text/*.
  """
  content_type = response.headers.get("Content-Type", "")
  if "charset=" in content_type.lower():
    return response.text
  return response.content.decode("utf-8", errors="replace")


def fetch_url(url: str, timeout=(CONNECT_TIMEOUT, READ_TIMEOUT), headers=None, session=None) -> str:
  """
  GETs `url` and returns the body as text.

  Raises FetchError on connection errors, timeouts and non-2xx responses.
  """
  request_headers = dict(default_headers)
  if headers:
    request_headers.update(headers)

  http = session or requests
  try:
    response = http.get(url, headers=request_headers, timeout=timeout)
  except requests.exceptions.Timeout as e:
    raise FetchError(url, f"timed out: {e}") from e
  except requests.exceptions.RequestException as e:
    raise FetchError(url, f"request failed: {e}") from e

  if not 200 <= response.status_code < 300:
    raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

  log_debug("req", f"Fetched {len(response.content)} bytes from {url}")
  return decode_body(response)
