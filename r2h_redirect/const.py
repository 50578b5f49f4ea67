PROXY_PARAM = "proxy"
LIVE_PARAM = "rtp"
PLAYBACK_PARAM = "rtsp"
SEEK_PARAM = "playseek"
TOKEN_PARAM = "r2h-token"
FCC_PARAM = "fcc"

RECOGNIZED_PARAMS = [
    PROXY_PARAM,
    LIVE_PARAM,
    PLAYBACK_PARAM,
    SEEK_PARAM,
    TOKEN_PARAM,
    FCC_PARAM,
]

LIVE_SCHEME = "rtp"
PLAYBACK_SCHEME = "rtsp"

# Marker separating the composite URL from ordinary parameters in the legacy convention.
LEGACY_SEEK_MARKER = "&playseek="

STATUS_TEXTS = {
    400: "Bad Request",
    404: "Not Found",
    500: "Internal Server Error",
}

REDIRECT_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
