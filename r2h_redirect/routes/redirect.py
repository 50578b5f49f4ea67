from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from r2h_redirect.configs import settings
from r2h_redirect.const import REDIRECT_METHODS
from r2h_redirect.responses import respond
from r2h_redirect.rewriter.pipeline import rewrite
from r2h_redirect.utils.diagnostics import RequestDiagnostics
from r2h_redirect.utils.http_utils import get_diagnostics, get_raw_query, get_request_url

redirect_router = APIRouter()


@redirect_router.api_route("/", methods=REDIRECT_METHODS, include_in_schema=False)
@redirect_router.api_route("/index.php", methods=REDIRECT_METHODS, include_in_schema=False)
async def redirect_stream(
    request: Request,
    diagnostics: Annotated[RequestDiagnostics, Depends(get_diagnostics)],
) -> Response:
    """
    Redirect to the live or playback URL of the streaming proxy.

    Query parameters: proxy, rtp, rtsp, playseek, r2h-token, fcc. A composite
    legacy URL is accepted as well when enabled.
    """
    diagnostics.info(f"Request received: {request.method} {get_request_url(request)}")
    decision = rewrite(get_raw_query(request), diagnostics, allow_legacy=settings.enable_legacy_format)
    return respond(decision, diagnostics)
