from urllib.parse import parse_qsl, unquote, urlsplit

from r2h_redirect.const import (
    LEGACY_SEEK_MARKER,
    LIVE_PARAM,
    PLAYBACK_PARAM,
    PROXY_PARAM,
    RECOGNIZED_PARAMS,
    SEEK_PARAM,
)
from r2h_redirect.rewriter.errors import MissingInput, MissingRequiredParameter


def parse_pairs(query: str) -> dict[str, str]:
    """Parse ``key=value`` pairs, keeping blank values. The first occurrence of a key wins."""
    params: dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(key, value)
    return params


def decode_query(raw_query: str, allow_legacy: bool = True) -> dict[str, str]:
    """
    Decode the raw query string into the recognized parameters.

    The named convention (``proxy=...&rtp=...&rtsp=...``) is canonical. When none of
    the recognized keys is present the query is read as a legacy composite URL.

    Args:
        raw_query (str): The query string exactly as received, without the leading ``?``.
        allow_legacy (bool): Whether the composite convention may be used as a fallback.

    Returns:
        dict[str, str]: The recognized parameters, values decoded once.

    Raises:
        MissingInput: If the query string is empty.
        MissingRequiredParameter: If no proxy can be located under any convention.
    """
    if not raw_query:
        raise MissingInput()

    params = parse_pairs(raw_query)
    if PROXY_PARAM in params:
        return {key: value for key, value in params.items() if key in RECOGNIZED_PARAMS}

    if allow_legacy and not any(key in params for key in (LIVE_PARAM, PLAYBACK_PARAM)):
        legacy = decode_legacy_query(raw_query)
        if legacy is not None:
            return legacy

    raise MissingRequiredParameter(PROXY_PARAM)


def decode_legacy_query(raw_query: str) -> dict[str, str] | None:
    """
    Decode the composite convention.

    The segment before ``&playseek=`` is a percent-encoded URL of the form
    ``scheme://proxy[:port]/rtp://group:port[?fcc=...]#rtsp://server/path``. The
    playback descriptor may also follow an ``&`` inside the query instead of the
    fragment. Whatever follows the marker is parsed as ordinary parameters.

    Returns None when the segment is not an absolute URL.
    """
    head, marker, tail = raw_query.partition(LEGACY_SEEK_MARKER)
    composite = unquote(head)
    if "://" not in composite:
        return None

    parts = urlsplit(composite)
    if not parts.scheme or not parts.netloc:
        return None

    params: dict[str, str] = {}
    if marker:
        params.update(
            {key: value for key, value in parse_pairs(SEEK_PARAM + "=" + tail).items() if key in RECOGNIZED_PARAMS}
        )
    params[PROXY_PARAM] = f"{parts.scheme}://{parts.netloc}"

    live_query, playback = _split_playback(parts.query, parts.fragment)
    if playback:
        params[PLAYBACK_PARAM] = playback

    live = parts.path.lstrip("/")
    if live.startswith("rtp/"):
        live = "rtp://" + live[len("rtp/"):]
    if live:
        # The live query stays on the descriptor, the resolver picks fcc from it.
        params[LIVE_PARAM] = f"{live}?{live_query}" if live_query else live

    return params


def _split_playback(query: str, fragment: str) -> tuple[str, str]:
    if fragment:
        return query, fragment
    if query.startswith("rtsp://"):
        return "", query
    index = query.find("&rtsp://")
    if index >= 0:
        return query[:index], query[index + 1:]
    return query, ""
