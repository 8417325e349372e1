import pytest

SAMPLE_M3U = """#EXTM3U
#EXTINF:-1 tvg-logo="https://img.example/one.png" group-title="News",News One
#EXTVLCOPT:http-user-agent=Mozilla/5.0 (SmartTV)
#EXTVLCOPT:http-referrer=https://news.example/
http://cdn.example/news/index.m3u8
#EXTINF:-1 tvg-logo="https://img.example/two.png" group-title="Sports",Sports Two
#EXTHTTP:{"cookie":"a=1; b=2; path=/","x-forwarded-for":"10.0.0.1"}
#KODIPROP:inputstream.adaptive.license_type=clearkey
#KODIPROP:inputstream.adaptive.license_key=00112233445566778899aabbccddeeff:ffeeddccbbaa99887766554433221100
https://cdn.example/sports/manifest.mpd|Origin=https://sports.example
#EXTINF:-1 group-title="Movies",Movies Three
http://cdn.example/movies.ts
"""

SAMPLE_JSON = """[
  {"name": "Json One", "link": "https://cdn.example/j1.m3u8", "logo": "https://img.example/j1.png",
   "cookie": "__hdnea__=st=1~exp=2~acl=/*~hmac=abc", "user-agent": "okhttp/4.9",
   "referer": "https://ref.example/", "origin": "https://origin.example"},
  {"name": "No Link", "link": ""},
  {"link": "https://cdn.example/j3.m3u8"}
]"""


@pytest.fixture
def sample_m3u():
  return SAMPLE_M3U


@pytest.fixture
def sample_json():
  return SAMPLE_JSON
