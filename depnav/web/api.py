"""Routes for the drill-down navigator."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from depnav.analysis.breadcrumb import Breadcrumb
from depnav.analysis.graph_models import GraphIndex
from depnav.analysis.projector import SubgraphProjector
from depnav.errors import RenderError

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Response models ---

class NodeInfo(BaseModel):
    name: str
    known: bool
    version: str | None = None
    dependencies: list[str]
    dependents: list[str]


class GraphStats(BaseModel):
    nodes: int
    edges: int
    default_root: str


# --- Helpers ---

def _breadcrumb(request: Request) -> Breadcrumb:
    index: GraphIndex = request.app.state.index
    crumb = Breadcrumb.from_query(request.url.query, index.default_root)
    logger.debug("breadcrumb %s", " > ".join(crumb.path))
    return crumb


# --- Endpoints ---

@router.get("/")
async def navigate(request: Request):
    """Render the neighborhood of the breadcrumb's focal node."""
    projector: SubgraphProjector = request.app.state.projector
    renderer = request.app.state.renderer

    document = projector.render_dot(_breadcrumb(request))
    try:
        body = await asyncio.to_thread(renderer.render, document)
    except RenderError as e:
        logger.warning("render failed: %s", e)
        return PlainTextResponse(f"error: {e}")
    return Response(content=body, media_type=renderer.media_type)


@router.get("/dot")
async def dot_source(request: Request):
    projector: SubgraphProjector = request.app.state.projector
    return PlainTextResponse(projector.render_dot(_breadcrumb(request)))


@router.get("/api/node", response_model=NodeInfo)
async def node_info(request: Request, name: str = Query(...)):
    index: GraphIndex = request.app.state.index
    return NodeInfo(
        name=name,
        known=name in index,
        version=index.version_of(name),
        dependencies=sorted(index.dependencies(name)),
        dependents=sorted(index.dependents(name)),
    )


@router.get("/api/stats", response_model=GraphStats)
async def stats(request: Request):
    index: GraphIndex = request.app.state.index
    return GraphStats(
        nodes=len(index.nodes),
        edges=index.edge_count,
        default_root=index.default_root,
    )
