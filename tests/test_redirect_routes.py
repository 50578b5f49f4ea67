from urllib.parse import quote

import pytest

from r2h_redirect.responses import respond
from r2h_redirect.rewriter.errors import BuildFailure
from r2h_redirect.rewriter.pipeline import build_target, rewrite
from r2h_redirect.schemas import LiveDescriptor, ProxyTarget, RedirectLive, Reject

PROXY = "proxy=http%3A%2F%2F10.0.0.1"
RTP = "rtp=rtp%3A%2F%2F239.1.2.3%3A10000"


def _redirect_location(client, query: str, path: str = "/", method: str = "GET") -> str:
    response = client.request(method, f"{path}?{query}", follow_redirects=False)
    assert response.status_code == 302
    assert response.content == b""
    return response.headers["location"]


def test_live_redirect(client):
    assert _redirect_location(client, f"{PROXY}&{RTP}") == "http://10.0.0.1/rtp/239.1.2.3:10000"


def test_playback_redirect(client):
    query = f"{PROXY}&rtsp=rtsp%3A%2F%2F10.0.0.2%2FPLTV%2Fa.smil&playseek=20240101120000-"
    assert _redirect_location(client, query) == "http://10.0.0.1/rtsp/10.0.0.2/PLTV/a.smil?playseek=20240101120000-"


def test_playback_wins_with_seek(client):
    query = f"{PROXY}&{RTP}&rtsp=rtsp%3A%2F%2F10.0.0.2%2Fa.smil&playseek=x"
    assert _redirect_location(client, query) == "http://10.0.0.1/rtsp/10.0.0.2/a.smil?playseek=x"


def test_live_wins_without_seek(client):
    query = f"{PROXY}&{RTP}&rtsp=rtsp%3A%2F%2F10.0.0.2%2Fa.smil"
    assert _redirect_location(client, query) == "http://10.0.0.1/rtp/239.1.2.3:10000"


def test_live_redirect_with_fcc_and_token(client):
    query = "proxy=http%3A%2F%2F10.0.0.1%3A5140&" + RTP + "&fcc=10.0.0.9%3A8027&r2h-token=secret"
    assert _redirect_location(client, query) == (
        "http://10.0.0.1:5140/rtp/239.1.2.3:10000?fcc=10.0.0.9%3A8027&r2h-token=secret"
    )


def test_seek_without_playback_falls_back_to_live(client):
    query = f"{PROXY}&{RTP}&rtsp=http%3A%2F%2Fbroken&playseek=x"
    assert _redirect_location(client, query) == "http://10.0.0.1/rtp/239.1.2.3:10000"


def test_descriptor_fcc_is_forwarded_in_both_formats(client):
    named = f"{PROXY}&rtp=rtp%3A%2F%2F239.1.2.3%3A10000%3Ffcc%3D10.0.0.9%3A8027"
    legacy = quote("http://10.0.0.1/rtp://239.1.2.3:10000?fcc=10.0.0.9:8027", safe="")
    expected = "http://10.0.0.1/rtp/239.1.2.3:10000?fcc=10.0.0.9%3A8027"
    assert _redirect_location(client, named) == expected
    assert _redirect_location(client, legacy) == expected


@pytest.mark.parametrize("method", ["GET", "HEAD", "POST"])
def test_any_method_on_legacy_script_path(client, method):
    location = _redirect_location(client, f"{PROXY}&{RTP}", path="/index.php", method=method)
    assert location == "http://10.0.0.1/rtp/239.1.2.3:10000"


def test_legacy_composite_redirect(client):
    composite = quote("http://10.0.0.1:5140/rtp://239.1.2.3:10000#rtsp://10.0.0.2/a.smil", safe="")
    assert _redirect_location(client, f"{composite}&playseek=x&r2h-token=t") == (
        "http://10.0.0.1:5140/rtsp/10.0.0.2/a.smil?playseek=x&r2h-token=t"
    )


@pytest.mark.parametrize(
    "query, reason",
    [
        ("", "Missing query string"),
        (RTP, "Missing required parameter: proxy"),
        (f"proxy=nowhere&{RTP}", "Invalid proxy address"),
        (f"{PROXY}&rtp=udp%3A%2F%2F239.1.2.3%3A10000", "No valid rtp or rtsp source"),
        (f"{PROXY}&playseek=x", "No valid rtp or rtsp source"),
    ],
)
def test_bad_request(client, query, reason):
    response = client.get(f"/?{query}" if query else "/", follow_redirects=False)
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["content-length"] == str(len(response.content))
    assert "location" not in response.headers
    assert reason in response.text


def test_unexpected_error_is_plain_text_500(client, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("r2h_redirect.routes.redirect.rewrite", explode)
    response = client.get(f"/?{PROXY}&{RTP}", follow_redirects=False)
    assert response.status_code == 500
    assert response.text == "Internal Server Error"


def test_build_failure_is_500(memory_sink):
    decision = Reject(error=BuildFailure())
    response = respond(decision, memory_sink)
    assert response.status_code == 500
    with pytest.raises(BuildFailure):
        build_target(decision)


def test_diagnostics_follow_request_milestones(memory_sink):
    decision = rewrite(f"{PROXY}&{RTP}&r2h-token=t", memory_sink)
    respond(decision, memory_sink)
    messages = memory_sink.messages
    assert messages[0] == "Proxy base: http://10.0.0.1/"
    assert messages[1] == "Live descriptor: rtp://239.1.2.3:10000"
    assert messages[2].startswith("Detected parameters: live=True, playback=False")
    assert messages[3] == "Mode selected: live"
    assert messages[4] == "Redirecting to: http://10.0.0.1/rtp/239.1.2.3:10000?r2h-token=t"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_empty_built_url_is_500(memory_sink, monkeypatch):
    monkeypatch.setattr("r2h_redirect.rewriter.pipeline.build_live_url", lambda *args, **kwargs: "")
    decision = RedirectLive(
        proxy=ProxyTarget(scheme="http", host="10.0.0.1"),
        descriptor=LiveDescriptor(host_port="239.1.2.3:10000"),
    )
    response = respond(decision, memory_sink)
    assert response.status_code == 500
    assert response.body == b"Failed to build target URL"
    assert "location" not in response.headers


def test_logged_target_matches_location_header(memory_sink):
    decision = rewrite(f"{PROXY}&rtsp=rtsp%3A%2F%2F10.0.0.2%2Fa.smil%3Fk%3Da%7Cb%5Ec&playseek=x", memory_sink)
    response = respond(decision, memory_sink)
    location = response.headers["location"]
    assert location == "http://10.0.0.1/rtsp/10.0.0.2/a.smil?k=a%7Cb%5Ec&playseek=x"
    assert memory_sink.messages[-1] == f"Redirecting to: {location}"
