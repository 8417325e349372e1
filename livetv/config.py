"""Library-wide defaults. Callers override per call, not by patching these."""

# Playlist fetch
CONNECT_TIMEOUT = 15
READ_TIMEOUT = 15
CLIENT_USER_AGENT = "LiveTVPro/1.0"

# Channel defaults
DEFAULT_CHANNEL_NAME = "Unknown Channel"
PLACEHOLDER_LOGO_URL = "https://via.placeholder.com/150?text={initials}"

# Prefix for ids produced without MD5
ID_FALLBACK_PREFIX = "m3u_"
