from r2h_redirect.rewriter.builders import build_live_url, build_playback_url
from r2h_redirect.rewriter.decoder import decode_query
from r2h_redirect.rewriter.errors import BuildFailure, RewriteError
from r2h_redirect.rewriter.resolver import resolve
from r2h_redirect.rewriter.selector import select
from r2h_redirect.schemas import Decision, RedirectLive, RedirectPlayback, Reject
from r2h_redirect.utils.diagnostics import DiagnosticSink


def rewrite(raw_query: str, sink: DiagnosticSink, allow_legacy: bool = True) -> Decision:
    """
    Run the decoder, resolver and selector over one raw query string.

    Hard failures of any stage end as a Reject carrying the error; nothing is raised.
    """
    try:
        params = decode_query(raw_query, allow_legacy=allow_legacy)
        inputs = resolve(params, sink)
    except RewriteError as e:
        sink.warning(f"Rejecting request: {e.message}")
        return Reject(error=e)
    return select(inputs, sink)


def build_target(decision: RedirectLive | RedirectPlayback) -> str:
    """
    Build the redirect target for a redirect decision.

    Raises:
        BuildFailure: If no URL could be assembled.
    """
    if isinstance(decision, RedirectLive):
        url = build_live_url(
            decision.proxy.base_url,
            decision.descriptor.host_port,
            fcc=decision.fcc,
            token=decision.token,
        )
    elif isinstance(decision, RedirectPlayback):
        url = build_playback_url(
            decision.proxy.base_url,
            decision.descriptor.host,
            decision.descriptor.path,
            embedded_query=decision.descriptor.query,
            seek=decision.seek,
            token=decision.token,
        )
    else:
        raise BuildFailure(f"Cannot build a URL for decision {decision.kind!r}")

    if not url:
        raise BuildFailure()
    return url
