from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import Response

from ..models import RuntimeConfig


router = APIRouter(tags=["config"])

log = structlog.get_logger(__name__)


def render_config_script(api_base_url: str) -> str:
    cfg = RuntimeConfig(apiBaseUrl=api_base_url)
    return f"window.__APP_CONFIG__ = {cfg.model_dump_json()};\n"


@router.api_route("/config.js", methods=["GET", "HEAD"], include_in_schema=False)
def get_config_script(request: Request) -> Response:
    api_base_url = request.app.state.api_base_url
    log.info("Serving config", apiBaseUrl=api_base_url)
    return Response(content=render_config_script(api_base_url), media_type="application/javascript")
