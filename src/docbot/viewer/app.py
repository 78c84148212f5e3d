"""HTTP API over the published guide directory."""

import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import FileResponse, JSONResponse
from starlette.routing import Route

from ..guides.search import search_guides
from ..guides.store import GuideStore

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 3


def _metadata_payload(items) -> list[dict]:
    return [item.model_dump(mode="json", by_alias=True) for item in items]


async def health(request: Request) -> JSONResponse:
    store: GuideStore = request.app.state.store
    return JSONResponse({"status": "ok", "guides": len(store.list_metadata())})


async def list_guides(request: Request) -> JSONResponse:
    store: GuideStore = request.app.state.store
    return JSONResponse(_metadata_payload(store.list_metadata()))


async def get_guide(request: Request) -> JSONResponse:
    store: GuideStore = request.app.state.store
    guide = store.get(request.path_params["guide_id"])
    if guide is None:
        return JSONResponse({"error": "Guide not found"}, status_code=404)
    return JSONResponse(guide.model_dump(mode="json", by_alias=True, exclude_none=True))


async def search(request: Request) -> JSONResponse:
    """``GET /api/search?q=...``: top matches, or every guide for a blank query."""
    query = request.query_params.get("q")
    if query is None:
        return JSONResponse({"error": 'Query parameter "q" is required'}, status_code=400)

    store: GuideStore = request.app.state.store
    metadata = store.list_metadata()
    if not query.strip():
        return JSONResponse(_metadata_payload(metadata))

    results = search_guides(metadata, query)[: request.app.state.search_limit]
    return JSONResponse(_metadata_payload(results))


async def image(request: Request) -> FileResponse | JSONResponse:
    store: GuideStore = request.app.state.store
    path = store.image_path(request.path_params["flow_id"], request.path_params["filename"])
    if path is None:
        return JSONResponse({"error": "Image not found"}, status_code=404)
    return FileResponse(path, media_type="image/png")


def create_app(store: GuideStore, search_limit: int = DEFAULT_SEARCH_LIMIT) -> Starlette:
    """Build the viewer application around ``store``."""
    app = Starlette(
        routes=[
            Route("/api/health", health),
            Route("/api/guides", list_guides),
            Route("/api/guides/{guide_id}", get_guide),
            Route("/api/search", search),
            Route("/images/{flow_id}/{filename}", image),
        ]
    )
    app.state.store = store
    app.state.search_limit = search_limit
    logger.debug(f"Viewer serving guides from {store.directory}")
    return app
