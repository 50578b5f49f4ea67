from urllib.parse import SplitResult, unquote, urlsplit

from r2h_redirect.const import (
    FCC_PARAM,
    LIVE_PARAM,
    LIVE_SCHEME,
    PLAYBACK_PARAM,
    PLAYBACK_SCHEME,
    PROXY_PARAM,
    SEEK_PARAM,
    TOKEN_PARAM,
)
from r2h_redirect.rewriter.decoder import parse_pairs
from r2h_redirect.rewriter.errors import (
    InvalidLiveDescriptor,
    InvalidPlaybackDescriptor,
    InvalidProxy,
    MissingRequiredParameter,
)
from r2h_redirect.schemas import LiveDescriptor, PlaybackDescriptor, ProxyTarget, SelectionInputs
from r2h_redirect.utils.diagnostics import DiagnosticSink


def decode_url_value(value: str) -> str:
    """
    Percent-decode a URL-valued parameter until it looks like an absolute URL.

    Values arrive decoded once by the query parser. Clients that encoded them twice
    still carry ``%3A%2F%2F``; a value already showing ``://`` is left alone so that
    escapes inside its own path or query survive.
    """
    for _ in range(2):
        if "://" in value:
            break
        decoded = unquote(value)
        if decoded == value:
            break
        value = decoded
    return value.strip()


def _split_url(value: str) -> SplitResult | None:
    try:
        parts = urlsplit(value)
        # Accessing port validates it.
        parts.port
    except ValueError:
        return None
    return parts


def _host_port(netloc: str) -> str:
    """Strip userinfo from a netloc, keeping host and port."""
    return netloc.rpartition("@")[2]


def parse_proxy(value: str) -> ProxyTarget:
    """
    Parse the proxy address into a ProxyTarget.

    Raises:
        InvalidProxy: If the value has no scheme or host.
    """
    decoded = decode_url_value(value)
    parts = _split_url(decoded)
    if parts is None or not parts.scheme or not parts.hostname:
        raise InvalidProxy(value)

    host = _host_port(parts.netloc)
    if parts.port is not None or host.endswith(":"):
        host = host.rpartition(":")[0]
    return ProxyTarget(scheme=parts.scheme.lower(), host=host, port=parts.port)


def parse_live_descriptor(value: str) -> LiveDescriptor:
    """
    Parse an ``rtp://host:port`` live descriptor.

    Only ``fcc`` is kept from the descriptor's own query. An explicit ``fcc``
    parameter supersedes it.

    Raises:
        InvalidLiveDescriptor: If the scheme is not rtp or the host is missing.
    """
    decoded = decode_url_value(value)
    parts = _split_url(decoded)
    if parts is None or parts.scheme.lower() != LIVE_SCHEME or not parts.hostname:
        raise InvalidLiveDescriptor(value)
    return LiveDescriptor(host_port=_host_port(parts.netloc), fcc=parse_pairs(parts.query).get(FCC_PARAM))


def parse_playback_descriptor(value: str) -> PlaybackDescriptor:
    """
    Parse an ``rtsp://host[:port]/path[?query]`` playback descriptor.

    Host, path and query are preserved verbatim.

    Raises:
        InvalidPlaybackDescriptor: If the scheme is not rtsp or the host is missing.
    """
    decoded = decode_url_value(value)
    parts = _split_url(decoded)
    if parts is None or parts.scheme.lower() != PLAYBACK_SCHEME or not parts.hostname:
        raise InvalidPlaybackDescriptor(value)
    return PlaybackDescriptor(host=_host_port(parts.netloc), path=parts.path, query=parts.query or None)


def resolve(params: dict[str, str], sink: DiagnosticSink) -> SelectionInputs:
    """
    Resolve decoded parameters into SelectionInputs.

    A malformed live or playback descriptor is reported to the sink and treated as
    absent; the mode selector decides whether the request can still be served.

    Raises:
        MissingRequiredParameter: If the proxy parameter is absent.
        InvalidProxy: If the proxy address cannot be parsed.
    """
    if PROXY_PARAM not in params:
        raise MissingRequiredParameter(PROXY_PARAM)
    proxy = parse_proxy(params[PROXY_PARAM])
    sink.info(f"Proxy base: {proxy.base_url}")

    live = None
    if LIVE_PARAM in params:
        try:
            live = parse_live_descriptor(params[LIVE_PARAM])
            sink.info(f"Live descriptor: rtp://{live.host_port}")
        except InvalidLiveDescriptor as e:
            sink.warning(f"Ignoring live descriptor: {e.message}")

    playback = None
    if PLAYBACK_PARAM in params:
        try:
            playback = parse_playback_descriptor(params[PLAYBACK_PARAM])
            sink.info(f"Playback descriptor: rtsp://{playback.host}{playback.path}")
        except InvalidPlaybackDescriptor as e:
            sink.warning(f"Ignoring playback descriptor: {e.message}")

    inputs = SelectionInputs(
        proxy=proxy,
        live=live,
        playback=playback,
        seek=params.get(SEEK_PARAM),
        token=params.get(TOKEN_PARAM),
        fcc=params.get(FCC_PARAM, live.fcc if live is not None else None),
    )
    sink.info(
        f"Detected parameters: live={inputs.has_live}, playback={inputs.has_playback}, "
        f"playseek={inputs.has_seek}, token={inputs.token is not None}, fcc={inputs.fcc is not None}"
    )
    return inputs
