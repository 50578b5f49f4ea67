from fastapi import Response
from fastapi.responses import RedirectResponse

from r2h_redirect.const import STATUS_TEXTS
from r2h_redirect.rewriter.errors import BuildFailure, RewriteError
from r2h_redirect.rewriter.pipeline import build_target
from r2h_redirect.schemas import Decision, Reject
from r2h_redirect.utils.diagnostics import DiagnosticSink


def error_response(status_code: int, message: str) -> Response:
    """Plain text error response whose body is the reason string."""
    return Response(content=message, status_code=status_code, media_type="text/plain")


def respond(decision: Decision, sink: DiagnosticSink) -> Response:
    """
    Turn a Decision into the single HTTP response of the request.

    Redirect decisions become a 302 with an empty body; rejections and build
    failures become a plain text error.
    """
    if isinstance(decision, Reject):
        return _reject(decision.error, sink)

    try:
        target_url = build_target(decision)
    except BuildFailure as e:
        return _reject(e, sink)

    # Starlette re-quotes characters outside the URL-safe set; log what the client receives.
    response = RedirectResponse(url=target_url, status_code=302)
    sink.info(f"Redirecting to: {response.headers['location']}")
    return response


def _reject(error: RewriteError, sink: DiagnosticSink) -> Response:
    status_text = STATUS_TEXTS.get(error.status_code, "Unknown Status")
    sink.warning(f"Responding {error.status_code} {status_text}: {error.message}")
    return error_response(error.status_code, error.message)
