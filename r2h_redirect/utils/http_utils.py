from starlette.requests import Request

from r2h_redirect.utils.diagnostics import RequestDiagnostics


def get_original_scheme(request: Request) -> str:
    """
    Determine the original scheme (http or https) of the incoming request.

    Args:
        request (Request): Incoming HTTP request.

    Returns:
        str: 'http' or 'https'
    """
    forwarded_proto = request.headers.get("X-Forwarded-Proto")
    if forwarded_proto:
        return forwarded_proto

    if (
        request.url.scheme == "https"
        or request.headers.get("X-Forwarded-Ssl") == "on"
        or request.headers.get("X-Forwarded-Protocol") == "https"
        or request.headers.get("X-Url-Scheme") == "https"
    ):
        return "https"

    return "http"


def get_raw_query(request: Request) -> str:
    """The query string exactly as received, still percent-encoded."""
    return request.scope.get("query_string", b"").decode("latin-1")


def get_request_url(request: Request) -> str:
    """Full request URL as seen by the client, used for logging only."""
    return str(request.url.replace(scheme=get_original_scheme(request)))


def get_diagnostics(request: Request) -> RequestDiagnostics:
    """Create the diagnostic sink of one request."""
    return RequestDiagnostics(request.headers.get("X-Request-Id"))
