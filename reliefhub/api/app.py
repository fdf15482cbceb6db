"""
HTTP surface for ReliefHub.

This module implements the REST endpoints over the orchestrators, the
health, info and metrics endpoints, and the WebSocket subscription for
social media updates.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, HTTPException, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from reliefhub.api.broadcast import Broadcaster
from reliefhub.bootstrap import Hub
from reliefhub.core.errors import AggregateExhausted, QueryValidationError
from reliefhub.core.models import (
    Address, Coordinate, ReportsEnvelope, SourcesCatalogue, UpdatesEnvelope,
)
from reliefhub.observability.logging_setup import get_logger
from reliefhub.settings import Settings

log = get_logger("reliefhub.api")


def create_app(settings: Settings, hub: Optional[Hub] = None) -> FastAPI:
    """
    Creates the FastAPI application.

    Args:
        settings: application settings
        hub: pre-built hub; one is created from the settings when omitted

    Returns:
        application whose lifespan starts and closes the hub
    """
    hub = hub or Hub(settings)
    broadcaster = Broadcaster()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if hub.updates is None:
            await hub.start()
        log.info(f"{settings.observability.service_name} ready")
        yield
        await hub.close()

    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Emergency response aggregation service",
        lifespan=lifespan,
    )
    app.state.hub = hub
    app.state.broadcaster = broadcaster

    start_time = time.time()

    @app.exception_handler(QueryValidationError)
    async def invalid_query(request: Request, exc: QueryValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(AggregateExhausted)
    async def exhausted(request: Request, exc: AggregateExhausted):
        log.error(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=502, content={"error": str(exc)})

    @app.get("/health")
    async def health():
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/info")
    async def info():
        """Service information"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "subscribers": len(broadcaster.active),
        })

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Geocoding

    @app.get("/api/geocode", response_model=Coordinate)
    async def geocode(location: Optional[str] = None):
        return await hub.geocoder.resolve_forward(location or "")

    @app.get("/api/geocode/reverse", response_model=Address)
    async def reverse_geocode(lat: float = Query(...), lng: float = Query(...)):
        return await hub.geocoder.resolve_reverse(lat, lng)

    # Official updates

    @app.get("/api/disasters/{disaster_id}/official-updates", response_model=UpdatesEnvelope)
    async def official_updates(disaster_id: str,
                               sources: Optional[str] = None,
                               category: Optional[str] = None,
                               severity: Optional[str] = None,
                               keywords: Optional[str] = None,
                               limit: Optional[int] = None):
        return await hub.updates.get_updates(disaster_id, sources, category, severity, keywords, limit)

    @app.get("/api/official-updates/sources", response_model=SourcesCatalogue)
    async def official_sources():
        return hub.updates.list_sources()

    @app.get("/api/official-updates/category/{category}", response_model=UpdatesEnvelope)
    async def updates_by_category(category: str, sources: Optional[str] = None, limit: Optional[int] = None):
        return await hub.updates.get_updates_by_category(category, sources, limit)

    @app.get("/api/official-updates/search", response_model=UpdatesEnvelope)
    async def search_updates(q: Optional[str] = None, sources: Optional[str] = None, limit: Optional[int] = None):
        return await hub.updates.search_updates(q, sources, limit)

    # Social media

    @app.get("/api/disasters/{disaster_id}/social-media", response_model=ReportsEnvelope)
    async def social_media(disaster_id: str,
                           keywords: Optional[str] = None,
                           disaster_type: Optional[str] = None,
                           limit: Optional[int] = None):
        result = await hub.reports.get_reports(disaster_id, keywords, disaster_type, limit)
        if result.broadcast is not None:
            await broadcaster.social_media_updated(result.broadcast)
        return result.envelope

    @app.get("/api/social-media/mock", response_model=ReportsEnvelope)
    async def social_media_preview(keywords: Optional[str] = None,
                                   disaster_type: Optional[str] = None,
                                   limit: Optional[int] = None):
        return await hub.reports.preview_reports(keywords, disaster_type, limit)

    @app.websocket("/ws")
    async def ws(websocket: WebSocket):
        """
        Subscription for social media updates.

        Subscribers receive {"event": "social_media_updated", "disaster_id", "data"}
        after each fresh fetch. Sending "ping" answers {"event": "pong"}.
        """
        await broadcaster.connect(websocket)
        try:
            while True:
                data = await websocket.receive_text()
                if data == "ping":
                    await websocket.send_json({"event": "pong"})
        except WebSocketDisconnect:
            broadcaster.disconnect(websocket)

    @app.get("/")
    async def root():
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "info": "/info",
                "metrics": "/metrics",
                "geocode": "/api/geocode",
                "official_updates": "/api/disasters/{id}/official-updates",
                "social_media": "/api/disasters/{id}/social-media",
                "ws": "/ws"
            }
        })

    return app
