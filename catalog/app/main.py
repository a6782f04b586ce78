import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse

from .config import get_settings
from .logging_config import clear_request_id, set_request_id, setup_logging
from .pagination import configure_pagination, get_pagination_defaults, parse_pagination
from .templating import build_templates

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)
    defaults = configure_pagination()
    logger.info("Pagination defaults: items=%s size=%s", defaults.items, defaults.size)
    yield


app = FastAPI(title="Catalog", lifespan=lifespan)
templates = build_templates()


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = set_request_id(request.headers.get("X-Request-ID"))
    try:
        response = await call_next(request)
    finally:
        clear_request_id()
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/pagination")
def pagination(request: Request):
    settings = get_settings()
    defaults = get_pagination_defaults()
    page, items = parse_pagination(
        request.query_params, defaults=defaults, max_items=settings.pagination_max_items
    )
    return {"page": page, "items": items, "size": list(defaults.size)}


@app.post("/preview", response_class=HTMLResponse)
def preview(request: Request, text: str = Form("")):
    return templates.TemplateResponse(request, "preview.html", {"text": text})
