from livetv.clearkey import build_clearkey_license
from livetv.descriptor import decode_descriptor, encode_descriptor
from livetv.ids import generate_channel_id
from livetv.inline_params import parse_inline_params
from livetv.json_parser import parse_json_playlist
from livetv.m3u_parser import parse_m3u
from livetv.models import Channel, ParsedChannel, ParseResult, PlaylistFormat, StreamMetadata
from livetv.playback import prepare_playback
from livetv.providers import PlaylistLoader, convert_to_channels, detect_format, get_channels, parse_playlist

__version__ = "1.0.0"
