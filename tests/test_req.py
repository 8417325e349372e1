import pytest
import requests

from livetv.config import CLIENT_USER_AGENT, CONNECT_TIMEOUT, READ_TIMEOUT
from livetv.errors import FetchError
from livetv.req import fetch_url


class FakeResponse:
  def __init__(self, status_code=200, text=""):
    self.status_code = status_code
    self.text = text
    self.content = text.encode("utf-8")
    self.headers = {"Content-Type": "text/plain; charset=utf-8"}


class FakeSession:
  def __init__(self, response=None, error=None):
    self.response = response
    self.error = error
    self.calls = []

  def get(self, url, headers=None, timeout=None):
    self.calls.append((url, headers, timeout))
    if self.error:
      raise self.error
    return self.response


def test_returns_body_and_sends_client_headers():
  session = FakeSession(FakeResponse(200, "#EXTM3U"))
  assert fetch_url("http://a/list.m3u", session=session) == "#EXTM3U"
  url, headers, timeout = session.calls[0]
  assert url == "http://a/list.m3u"
  assert headers == {"User-Agent": CLIENT_USER_AGENT}
  assert timeout == (CONNECT_TIMEOUT, READ_TIMEOUT)


def test_extra_headers_override_defaults():
  session = FakeSession(FakeResponse(204, ""))
  fetch_url("http://a", headers={"User-Agent": "Other", "Referer": "r"}, session=session)
  assert session.calls[0][1] == {"User-Agent": "Other", "Referer": "r"}


@pytest.mark.parametrize("status", [301, 404, 500])
def test_non_2xx_raises(status):
  with pytest.raises(FetchError) as info:
    fetch_url("http://a", session=FakeSession(FakeResponse(status, "nope")))
  assert info.value.status_code == status


@pytest.mark.parametrize("error", [
  requests.exceptions.ConnectTimeout("slow"),
  requests.exceptions.ConnectionError("refused"),
  requests.exceptions.InvalidURL("bad"),
])
def test_transport_errors_raise_fetch_error(error):
  with pytest.raises(FetchError):
    fetch_url("http://a", session=FakeSession(error=error))


def _response(body: bytes, content_type: str) -> requests.Response:
  response = requests.Response()
  response.status_code = 200
  response._content = body
  response.headers["Content-Type"] = content_type
  response.encoding = requests.utils.get_encoding_from_headers(response.headers)
  return response


def test_body_without_charset_is_utf8():
  body = "#EXTINF:-1,Café Télé\n".encode("utf-8")
  session = FakeSession(_response(body, "text/plain"))
  assert fetch_url("http://a/list.m3u", session=session) == "#EXTINF:-1,Café Télé\n"


def test_declared_charset_is_honoured():
  body = "#EXTINF:-1,Café\n".encode("latin-1")
  session = FakeSession(_response(body, "text/plain; charset=ISO-8859-1"))
  assert fetch_url("http://a/list.m3u", session=session) == "#EXTINF:-1,Café\n"


def test_invalid_utf8_is_replaced():
  session = FakeSession(_response(b"#EXTINF:-1,\xff\n", "application/octet-stream"))
  assert fetch_url("http://a/list.m3u", session=session) == "#EXTINF:-1,\ufffd\n"
