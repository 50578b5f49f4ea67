from enum import Enum

from r2h_redirect.rewriter.errors import NoValidSource
from r2h_redirect.schemas import Decision, RedirectLive, RedirectPlayback, Reject, SelectionInputs
from r2h_redirect.utils.diagnostics import DiagnosticSink


class Mode(str, Enum):
    LIVE = "live"
    PLAYBACK = "playback"
    REJECT = "reject"


def choose_mode(has_live: bool, has_playback: bool, has_seek: bool) -> Mode:
    """
    Decide between live and playback.

    A seek position paired with a playback descriptor selects playback. Without a
    seek, a live descriptor wins. A playback descriptor alone still serves playback,
    and a seek without a playback descriptor falls back to live.
    """
    if has_seek and has_playback:
        return Mode.PLAYBACK
    if has_live:
        return Mode.LIVE
    if has_playback:
        return Mode.PLAYBACK
    return Mode.REJECT


def select(inputs: SelectionInputs, sink: DiagnosticSink) -> Decision:
    """Turn resolved inputs into the terminal Decision for this request."""
    mode = choose_mode(inputs.has_live, inputs.has_playback, inputs.has_seek)

    if mode is Mode.PLAYBACK:
        sink.info("Mode selected: playback" + (f" (playseek={inputs.seek})" if inputs.has_seek else ""))
        return RedirectPlayback(proxy=inputs.proxy, descriptor=inputs.playback, seek=inputs.seek, token=inputs.token)

    if mode is Mode.LIVE:
        if inputs.has_seek:
            sink.warning(f"Ignoring playseek={inputs.seek}: no valid playback descriptor")
        sink.info("Mode selected: live")
        return RedirectLive(proxy=inputs.proxy, descriptor=inputs.live, fcc=inputs.fcc, token=inputs.token)

    sink.warning("Mode selected: none, no valid rtp or rtsp source")
    return Reject(error=NoValidSource())
