from __future__ import annotations

import os
from typing import Any, List, Optional, Tuple
from urllib.parse import urlencode, urlsplit

import httpx
import redis.asyncio as redis
from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, ORJSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware
from starlette.status import HTTP_303_SEE_OTHER

from .auth import Authenticator
from .errors import AuthenticationError, ConfigurationError, DashboardError
from .helpers import format_count, format_idr
from .model import Summary, TableQuery, aggregate, filter_options
from .model import query_table
from .model.session import AuthUser, SessionStore, new_store
from .model.session import BACKEND as SESSION_BACKEND
from .model.table import PAGE_SIZES
from .participants import ParticipantsSource, UpstreamParticipants
from .participants import load_records

HERE = os.path.dirname(os.path.abspath(__file__))

templates = Jinja2Templates(directory=os.path.join(HERE, "templates"))
templates.env.filters["idr"] = format_idr
templates.env.filters["num"] = format_count

# ----------------------------
# Config & Constants
# ----------------------------
API_URL = os.environ.get("API_URL", None)
API_TOKEN = os.environ.get("API_TOKEN", None)
UPSTREAM_TIMEOUT = float(os.environ.get("UPSTREAM_TIMEOUT", "10.0"))

SESSION_SECRET = os.environ.get("SESSION_SECRET", "dev-secret-change-me")
AUTH_EMAIL = os.environ.get("AUTH_EMAIL", "admin@example.com")
AUTH_PASSWORD = os.environ.get("AUTH_PASSWORD", "supasecret")

SITE_NAME = "Ticket Sales Dashboard"

app = FastAPI(
    title=SITE_NAME,
    default_response_class=ORJSONResponse,
)
app.mount("/static", StaticFiles(directory=os.path.join(HERE, "static")),
          name="static")
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)


# ---
# startup / shutdown
# ---
@app.on_event("startup")
async def _say_hello():
    print('\n' * 3)
    print('=' * 50)
    print(f'{SITE_NAME} is starting up...')
    print(f'   - Session Backend: {SESSION_BACKEND}')
    print(f'   - Participants API: {API_URL or "(not configured)"}')
    print('=' * 50)
    print('\n' * 3)


@app.on_event("startup")
async def _http_client_start():
    app.state.http = httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT)


@app.on_event("startup")
async def _redis_start():
    if SESSION_BACKEND == 'redis':
        REDIS_URL = os.getenv("REDIS_URL", "redis://127.0.0.1:6379")
        app.state.redis = redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_timeout=2.0,
            socket_connect_timeout=2.0,
            retry_on_timeout=True,
        )


@app.on_event("shutdown")
async def _http_client_stop():
    http = getattr(app.state, "http", None)
    if http is not None:
        await http.aclose()
        app.state.http = None


@app.on_event("shutdown")
async def _redis_stop():
    r = getattr(app.state, "redis", None)
    if r is not None:
        await r.aclose()
        app.state.redis = None


# ----------------------------
# Dependencies
# ----------------------------
async def session_store(request: Request) -> SessionStore:
    return new_store(session=request.session,
                     r=getattr(app.state, "redis", None))


async def authenticator(
    store: SessionStore = Depends(session_store),
) -> Authenticator:
    return Authenticator(store, AUTH_EMAIL, AUTH_PASSWORD)


async def participants_source() -> ParticipantsSource:
    http = getattr(app.state, "http", None)
    if http is None:
        raise RuntimeError("HTTP client not initialized")
    return UpstreamParticipants(http, API_URL, API_TOKEN)


async def require_user(
    auth: Authenticator = Depends(authenticator),
) -> AuthUser:
    user = await auth.current_user()
    if not user:
        raise HTTPException(status_code=401, detail="not signed in")
    return user


# ----------------------------
# Helpers
# ----------------------------
def safe_next(next: Optional[str], default: str = "/dashboard") -> str:
    # only local paths; browsers read "\" as "/", so /\host is //host
    if not next or not next.startswith("/"):
        return default
    parts = urlsplit(next.replace("\\", "/"))
    if parts.scheme or parts.netloc or next.startswith(("//", "/\\")):
        return default
    return next


def login_redirect(request: Request) -> RedirectResponse:
    dest = request.url.path
    if request.url.query:
        dest = f"{dest}?{request.url.query}"
    qs = urlencode({"next": dest}, safe="/")
    return RedirectResponse(url=f"/login?{qs}", status_code=307)


def error_status(err: DashboardError) -> int:
    return 500 if isinstance(err, ConfigurationError) else 502


def chart_scales(summary: Summary) -> dict:
    # bar heights are relative to the largest value; the donut needs the
    # checked-in share of the two slices
    checked = summary.checked_in_count
    total = checked + summary.awaiting_count
    return {
        "max_count": max([p.count for p in summary.by_date] or [0]) or 1,
        "max_paid": max([p.total_paid for p in summary.by_date] or [0]) or 1,
        "checked_pct": (checked / total * 100) if total else 0,
    }


async def fetch_records(
    source: ParticipantsSource,
) -> Tuple[List[Any], Optional[DashboardError]]:
    try:
        return await load_records(source), None
    except DashboardError as e:
        print("Participants fetch failed:", e)
        return [], e


# ----------------------------
# Landing / auth pages
# ----------------------------
@app.get("/")
async def landing(auth: Authenticator = Depends(authenticator)):
    user = await auth.current_user()
    return RedirectResponse(
        url="/dashboard" if user else "/login",
        status_code=HTTP_303_SEE_OTHER,
    )


@app.get("/login", response_class=HTMLResponse)
async def login_get(
    request: Request,
    next: Optional[str] = "/dashboard",
    auth: Authenticator = Depends(authenticator),
):
    if await auth.current_user():
        return RedirectResponse(url=safe_next(next),
                                status_code=HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(
        request,
        "login.html",
        {"site_name": SITE_NAME, "next": safe_next(next), "error": None,
         "email": ""},
    )


@app.post("/login", response_class=HTMLResponse)
async def login_post(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    next: str = Form("/dashboard"),
    auth: Authenticator = Depends(authenticator),
):
    try:
        await auth.login(email, password)
    except AuthenticationError as e:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"site_name": SITE_NAME, "next": safe_next(next),
             "error": str(e), "email": email},
            status_code=401,
        )
    return RedirectResponse(url=safe_next(next),
                            status_code=HTTP_303_SEE_OTHER)


@app.get("/logout")
async def logout(auth: Authenticator = Depends(authenticator)):
    await auth.logout()
    return RedirectResponse(url="/login", status_code=HTTP_303_SEE_OTHER)


# ----------------------------
# Dashboard
# ----------------------------
@app.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    auth: Authenticator = Depends(authenticator),
    source: ParticipantsSource = Depends(participants_source),
):
    user = await auth.current_user()
    if not user:
        return login_redirect(request)

    records, err = await fetch_records(source)
    summary = None if err else aggregate(records)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "site_name": SITE_NAME,
            "user": user,
            "active_tab": "dashboard",
            "error": str(err) if err else None,
            "summary": summary,
            "chart": chart_scales(summary) if summary else None,
        },
        status_code=error_status(err) if err else 200,
    )


# ----------------------------
# Ticket table
# ----------------------------
@app.get("/tickets", response_class=HTMLResponse)
async def tickets_page(
    request: Request,
    q: Optional[str] = None,
    type: Optional[str] = None,
    date: Optional[str] = None,
    sort: Optional[str] = None,
    dir: Optional[str] = None,
    page: Optional[str] = None,
    size: Optional[str] = None,
    auth: Authenticator = Depends(authenticator),
    source: ParticipantsSource = Depends(participants_source),
):
    user = await auth.current_user()
    if not user:
        return login_redirect(request)

    query = TableQuery.from_params(q=q, type=type, date=date, sort=sort,
                                   dir=dir, page=page, size=size)
    records, err = await fetch_records(source)
    types, dates = filter_options(records)
    return templates.TemplateResponse(
        request,
        "tickets.html",
        {
            "site_name": SITE_NAME,
            "user": user,
            "active_tab": "tickets",
            "error": str(err) if err else None,
            "query": query,
            "table": None if err else query_table(records, query),
            "types": types,
            "dates": dates,
            "page_sizes": PAGE_SIZES,
        },
        status_code=error_status(err) if err else 200,
    )


# ----------------------------
# API
# ----------------------------
@app.get("/api/participants")
async def api_participants(
    user: AuthUser = Depends(require_user),
    source: ParticipantsSource = Depends(participants_source),
):
    try:
        payload = await source.fetch()
    except DashboardError as e:
        print("Participants fetch failed:", e)
        return ORJSONResponse({"error": str(e)},
                              status_code=error_status(e))
    if payload is None:
        # upstream 404: no data yet
        payload = {"data": []}
    return ORJSONResponse(payload, headers={"Cache-Control": "no-store"})


@app.get("/api/summary")
async def api_summary(
    user: AuthUser = Depends(require_user),
    source: ParticipantsSource = Depends(participants_source),
):
    records, err = await fetch_records(source)
    if err:
        return ORJSONResponse({"error": str(err)},
                              status_code=error_status(err))
    return aggregate(records).to_dict()


@app.get("/api/tickets")
async def api_tickets(
    q: Optional[str] = None,
    type: Optional[str] = None,
    date: Optional[str] = None,
    sort: Optional[str] = None,
    dir: Optional[str] = None,
    page: Optional[str] = None,
    size: Optional[str] = None,
    user: AuthUser = Depends(require_user),
    source: ParticipantsSource = Depends(participants_source),
):
    records, err = await fetch_records(source)
    if err:
        return ORJSONResponse({"error": str(err)},
                              status_code=error_status(err))
    query = TableQuery.from_params(q=q, type=type, date=date, sort=sort,
                                   dir=dir, page=page, size=size)
    types, dates = filter_options(records)
    result = query_table(records, query).to_dict()
    result["types"] = types
    result["dates"] = dates
    return result
