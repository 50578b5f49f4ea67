import logging

from fastapi import FastAPI

from r2h_redirect.configs import settings
from r2h_redirect.middleware import ErrorResponseMiddleware
from r2h_redirect.routes import redirect_router
from r2h_redirect.utils.diagnostics import configure_logging

configure_logging(settings.log_level, settings.log_file)
logger = logging.getLogger(__name__)

app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
app.add_middleware(ErrorResponseMiddleware)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


app.include_router(redirect_router, tags=["redirect"])


def run():
    import uvicorn

    logger.info(f"Starting redirect middleware on {settings.host}:{settings.port}")
    uvicorn.run(
        "r2h_redirect.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        workers=settings.workers,
    )


if __name__ == "__main__":
    run()
