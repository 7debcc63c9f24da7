"""
FastAPI entrypoint.

This file focuses on:
- routing
- request/response handling
- wiring together settings + clients + templates
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .logging_config import setup_logging
from .lookup import ForecastLookup
from .presenters import build_view
from .schemas import LookupState
from .settings import settings
from .weather_clients import NominatimClient, OpenMeteoClient

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent

app = FastAPI(title=settings.app_name)

# Static and template directories for the single-page UI.
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")

# API clients (constructed once).
geocoder = NominatimClient(
    base_url=settings.geocode_url,
    user_agent=settings.user_agent,
    timeout_s=settings.request_timeout_s,
)
forecaster = OpenMeteoClient(base_url=settings.weather_url, timeout_s=settings.request_timeout_s)


def get_lookup() -> ForecastLookup:
    """
    FastAPI dependency: one controller per request.

    Each HTTP request is its own submission, so there is no state to share
    between users.
    """
    return ForecastLookup(geocoder, forecaster)


# -------------------------
# UI routes
# -------------------------

@app.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    q: Optional[str] = Query(None, max_length=255),
    lookup: ForecastLookup = Depends(get_lookup),
):
    """
    Search form + result card.

    First visit (no `q`) looks up the default city. A blank submission
    shows the form again without calling anything.
    """
    query = settings.default_city if q is None else q.strip()
    if query:
        await lookup.run(query)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.app_name,
            "q": query,
            "view": build_view(lookup.state),
        },
    )


# -------------------------
# JSON API
# -------------------------

@app.get("/api/forecast", response_model=LookupState)
async def api_forecast(
    q: str = Query(..., min_length=1, max_length=255, pattern=r"^\s*\S"),
    lookup: ForecastLookup = Depends(get_lookup),
):
    """
    Run one lookup and return the settled state.

    Lookup failures are not HTTP errors: they come back as
    {"status": "failure", "reason": "..."} for the page to display.
    """
    return await lookup.run(q.strip())


@app.get("/health")
def health():
    return {"ok": True}
