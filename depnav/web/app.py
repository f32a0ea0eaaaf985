"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request, Response

from depnav import __version__
from depnav.analysis.graph_models import GraphIndex
from depnav.analysis.projector import ProjectorOptions, SubgraphProjector
from depnav.render import Renderer
from depnav.web.api import router


def create_app(
    index: GraphIndex,
    renderer: Renderer,
    options: ProjectorOptions | None = None,
) -> FastAPI:
    """Build the navigator app around a read-only graph snapshot."""
    app = FastAPI(title="depnav", version=__version__)

    # Shared by every request; never written after this point
    app.state.index = index
    app.state.renderer = renderer
    app.state.projector = SubgraphProjector(index, options)

    @app.middleware("http")
    async def no_cache(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["Cache-Control"] = "no-cache"
        return response

    app.include_router(router)
    return app
