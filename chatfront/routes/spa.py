from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse


router = APIRouter(tags=["spa"])


def _asset_path(static_dir: Path, path: str) -> Path | None:
    if not path:
        return None
    candidate = (static_dir / path).resolve()
    # Never serve anything outside the build directory
    if not candidate.is_relative_to(static_dir):
        return None
    if not candidate.is_file():
        return None
    return candidate


@router.api_route("/{path:path}", methods=["GET", "HEAD"], include_in_schema=False)
def serve_spa(path: str, request: Request) -> FileResponse:
    """Serve a built asset, or index.html so the SPA can route client-side."""
    static_dir: Path = request.app.state.static_dir
    asset = _asset_path(static_dir, path)
    if asset is not None:
        return FileResponse(asset)

    index_path = static_dir / "index.html"
    if not index_path.is_file():
        raise RuntimeError(f"SPA index.html not found at {index_path}")
    return FileResponse(index_path)
