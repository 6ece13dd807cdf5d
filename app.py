# app.py
import logging
from typing import AsyncIterator, Tuple

from dotenv import load_dotenv
load_dotenv()

import httpx
from fastapi import Depends, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import gradio as gr

from aggregator import aggregate, response_status
from auth import AuthError, authorize
from dispatcher import Dispatcher
from endpoints import build_endpoints
from schemas import StatusReport
from settings import Settings, load_settings
from validation import PayloadValidationError, partition_urls, validate_submission

logging.basicConfig(
    level=load_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------- Dependencies ----------------
def get_settings() -> Settings:
    return load_settings()

async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        yield client

def get_endpoints(settings: Settings = Depends(get_settings)) -> Tuple[str, ...]:
    return build_endpoints(settings.extra_endpoints)

def get_dispatcher(client: httpx.AsyncClient = Depends(get_http_client)) -> Dispatcher:
    return Dispatcher(client)

# ---------------- FastAPI ----------------
api = FastAPI(title="IndexNow Notifier (Validate → Fan out → Report)")

api.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@api.exception_handler(AuthError)
async def _on_auth_error(request: Request, exc: AuthError):
    return JSONResponse({"error": "unauthorized"}, status_code=401)

@api.exception_handler(PayloadValidationError)
async def _on_validation_error(request: Request, exc: PayloadValidationError):
    return JSONResponse(exc.to_dict(), status_code=400)

@api.get("/healthz")
def healthz():
    return {"ok": True, "service": "indexnow-notifier"}

@api.get("/notify/status")
def notify_status(
    settings: Settings = Depends(get_settings),
    endpoints: Tuple[str, ...] = Depends(get_endpoints),
):
    """Config introspection. Reports whether secrets are set, never their values."""
    report = StatusReport(
        ok=True,
        message="IndexNow endpoint OK",
        host=settings.host,
        hasKey=settings.has_key,
        hasToken=settings.has_token,
        keyLocation=settings.key_location,
        endpoints=list(endpoints),
    )
    return JSONResponse(report.model_dump())

@api.post("/notify")
async def notify(
    request: Request,
    settings: Settings = Depends(get_settings),
    endpoints: Tuple[str, ...] = Depends(get_endpoints),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    x_notify_token: str = Header(default=""),
    x_indexnow_token: str = Header(default=""),
):
    """
    - verify token
    - validate urlList against the configured host
    - fan out to every endpoint (with per-endpoint retry)
    - 200 if any endpoint accepted, else 207 with per-endpoint detail
    """
    authorize(x_notify_token or x_indexnow_token, settings.token)

    payload = validate_submission(
        await request.body(),
        host=settings.host,
        key=settings.key,
        key_location=settings.key_location,
    )
    results = await dispatcher.dispatch(payload, endpoints)
    outcome = aggregate(results, submitted=len(payload.urlList))

    logger.info(
        "IndexNow submitted %d urls to %d endpoints, accepted=%s",
        outcome.submitted, len(endpoints), outcome.ok,
    )
    return JSONResponse(outcome.model_dump(), status_code=response_status(outcome))

# ---------------- Gradio UI (for manual smoke tests) ----------------
def ui_preview(urls_text):
    # dry run only: no token check, nothing is sent
    settings = load_settings()
    entries = [u.strip() for u in (urls_text or "").split("\n") if u.strip()]
    part = partition_urls(entries, settings.host)
    return {
        "host": settings.host,
        "hasKey": settings.has_key,
        "accepted": part.kept,
        "dropped": part.rejected,
        "truncated": part.truncated,
        "endpoints": list(build_endpoints(settings.extra_endpoints)),
        "hint": "POST {\"urlList\": [...]} to /notify with X-Notify-Token to submit",
    }

with gr.Blocks(theme=gr.themes.Soft()) as demo:
    gr.Markdown("## 🔔 IndexNow Notifier\nPreview which URLs would be submitted and to which endpoints.")
    u = gr.Textbox(label="urls (one per line)", lines=6, value="https://example.com/")
    btn = gr.Button("Preview submission")
    out = gr.JSON(label="Preview")
    btn.click(ui_preview, [u], out)

# Mount Gradio UI at "/" and keep FastAPI routes
app = gr.mount_gradio_app(api, demo, path="/")
