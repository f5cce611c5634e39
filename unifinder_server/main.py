import logging
from typing import List

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import load_settings
from .external_lookup import (
    TransportError,
    UpstreamStatusError,
    search_rankings,
    search_universities,
)
from .models import ErrorOut, UniversityRecord

logger = logging.getLogger(__name__)

settings = load_settings()
app = FastAPI(title="University Finder")

ERROR_RESPONSES = {
    "default": {"model": ErrorOut, "description": "Upstream or transport failure"}
}


@app.exception_handler(UpstreamStatusError)
async def upstream_status_handler(request: Request, exc: UpstreamStatusError):
    return JSONResponse(
        status_code=exc.status_code, content={"error": "Failed to fetch data"}
    )


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    return JSONResponse(status_code=500, content={"error": "An error occurred"})


def relay(data) -> JSONResponse:
    try:
        return JSONResponse(status_code=200, content=data)
    except ValueError as e:
        # NaN/Infinity parse from upstream but cannot be re-encoded as JSON
        logger.warning(f"Upstream body cannot be relayed: {e}")
        raise TransportError(str(e)) from e


@app.get("/ping")
async def ping():
    return {"status": "ok"}


@app.get(
    "/api/universities",
    responses={200: {"model": List[UniversityRecord]}, **ERROR_RESPONSES},
)
def get_universities(country: str = ""):
    data = search_universities(
        settings.universities_url, country, timeout=settings.timeout
    )
    return relay(data)


@app.get("/api/rankings", responses=ERROR_RESPONSES)
def get_rankings(country: str = "", region: str = ""):
    data = search_rankings(
        settings.rankings_url, country, region, timeout=settings.timeout
    )
    return relay(data)


def run():
    logger.info(f"Serving on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
