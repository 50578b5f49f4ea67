from urllib.parse import quote

from r2h_redirect.const import FCC_PARAM, LIVE_SCHEME, PLAYBACK_SCHEME, SEEK_PARAM, TOKEN_PARAM


def encode_value(value: str) -> str:
    """Percent-encode a query value so that it round-trips through percent-decoding."""
    return quote(value, safe="")


def append_query(url: str, key: str, value: str) -> str:
    """Append ``key=value`` with ``?`` or ``&`` depending on whether the URL has a query yet."""
    connector = "&" if "?" in url else "?"
    return f"{url}{connector}{key}={encode_value(value)}"


def append_token(url: str, token: str | None) -> str:
    """Append the pass-through token unless the URL already carries one."""
    if not token or f"{TOKEN_PARAM}=" in url:
        return url
    return append_query(url, TOKEN_PARAM, token)


def join_proxy_path(proxy_base: str, path: str) -> str:
    return proxy_base.rstrip("/") + "/" + path.lstrip("/")


def build_live_url(proxy_base: str, host_port: str, fcc: str | None = None, token: str | None = None) -> str:
    """
    Build ``<proxy>/rtp/<host>[:<port>][?fcc=..][&r2h-token=..]``.

    Args:
        proxy_base (str): Normalized proxy base, e.g. ``http://10.0.0.1:5140/``.
        host_port (str): Multicast address of the live descriptor.
        fcc (str, optional): Fast channel change server forwarded to the proxy.
        token (str, optional): Pass-through token.

    Returns:
        str: The absolute live URL.
    """
    url = join_proxy_path(proxy_base, f"{LIVE_SCHEME}/{host_port}")
    if fcc:
        url = append_query(url, FCC_PARAM, fcc)
    return append_token(url, token)


def build_playback_url(
    proxy_base: str,
    host: str,
    path: str,
    embedded_query: str | None = None,
    seek: str | None = None,
    token: str | None = None,
) -> str:
    """
    Build ``<proxy>/rtsp/<host><path>[?<query>][&playseek=..][&r2h-token=..]``.

    The descriptor's own query comes first, verbatim. When a seek is given, any
    playseek already present in that query is replaced so the URL carries exactly one.

    Args:
        proxy_base (str): Normalized proxy base.
        host (str): Host (and port) of the RTSP server.
        path (str): Path of the RTSP resource.
        embedded_query (str, optional): Query carried by the RTSP descriptor.
        seek (str, optional): Seek position or time range.
        token (str, optional): Pass-through token.

    Returns:
        str: The absolute playback URL.
    """
    url = join_proxy_path(proxy_base, f"{PLAYBACK_SCHEME}/{host}{path}")
    if embedded_query and seek:
        embedded_query = _drop_key(embedded_query, SEEK_PARAM)
    if embedded_query:
        url = f"{url}?{embedded_query}"
    if seek:
        url = append_query(url, SEEK_PARAM, seek)
    return append_token(url, token)


def _drop_key(query: str, key: str) -> str:
    return "&".join(segment for segment in query.split("&") if segment and segment.partition("=")[0] != key)
