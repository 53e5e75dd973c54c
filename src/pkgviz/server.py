"""Serve an analysis result as JSON over HTTP."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from pkgviz.model import AnalysisResult
from pkgviz.renderer.json import result_to_dict, stats_to_dict

logger = logging.getLogger(__name__)


def create_app(result: AnalysisResult) -> FastAPI:
    """Build the app exposing ``/api/graph`` and ``/api/stats`` for *result*."""
    # The result never changes while serving.
    graph = result_to_dict(result)
    stats = stats_to_dict(result)

    app = FastAPI(title="pkgviz", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/api/graph")
    def get_graph():
        return graph

    @app.get("/api/stats")
    def get_stats():
        return stats

    return app


def serve(
    result: AnalysisResult,
    *,
    host: str = "127.0.0.1",
    port: int = 3000,
    open_browser: bool = False,
) -> None:
    """Serve *result* until interrupted."""
    import uvicorn

    url = f"http://{host}:{port}/api/graph"
    logger.warning("Serving dependency graph at %s (Ctrl+C to stop)", url)

    if open_browser:
        import threading
        import webbrowser

        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    uvicorn.run(create_app(result), host=host, port=port, log_level="warning")
