"""FastAPI app entrypoint for task-relay.

Every path and method not claimed by an operational route is relayed to the
task runner; the rendered result becomes the response body.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.requests import ClientDisconnect

from task_relay.cache.base import ResponseCache
from task_relay.cache.memory import InMemoryResponseCache
from task_relay.cache.models import CachedResponse
from task_relay.config.relay import RelayConfig
from task_relay.config.settings import Settings, get_settings
from task_relay.orchestrator import Orchestrator
from task_relay.runs.errors import RelayError
from task_relay.runs.models import TaskParameters
from task_relay.runs.poller import Sleep

logger = logging.getLogger(__name__)

# Standard methods plus the WebDAV and PURGE extensions.
RELAY_METHODS = [
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "OPTIONS",
    "TRACE",
    "PROPFIND",
    "PROPPATCH",
    "MKCOL",
    "COPY",
    "MOVE",
    "LOCK",
    "UNLOCK",
    "REPORT",
    "SEARCH",
    "PURGE",
]
FAVICON_SUFFIX = "favicon.ico"


def _ensure_runtime_state(
    app: FastAPI,
    *,
    settings: Settings,
    http_client: httpx.AsyncClient | None,
    cache: ResponseCache | None,
    sleep: Sleep | None,
) -> None:
    if not hasattr(app.state, "orchestrator"):
        missing = settings.missing_required()
        if missing:
            raise RuntimeError(
                "Missing task runner configuration. Set " + " and ".join(missing)
                + " before starting the app."
            )
        client = http_client
        if client is None:
            client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_s))
            app.state.owned_http_client = client
        config = RelayConfig.from_settings(settings)
        if sleep is None:
            app.state.orchestrator = Orchestrator.from_client(client, config=config)
        else:
            app.state.orchestrator = Orchestrator.from_client(client, config=config, sleep=sleep)

    if not hasattr(app.state, "cache"):
        if not settings.cache_enabled:
            app.state.cache = None
        else:
            app.state.cache = (
                cache
                if cache is not None
                else InMemoryResponseCache(max_entries=settings.cache_max_entries)
            )

    if not hasattr(app.state, "settings"):
        app.state.settings = settings


def create_app(
    *,
    settings_override: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    cache: ResponseCache | None = None,
    sleep: Sleep | None = None,
) -> FastAPI:
    settings = settings_override or get_settings()
    logging.getLogger("task_relay").setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _ensure_runtime_state(
            app,
            settings=settings,
            http_client=http_client,
            cache=cache,
            sleep=sleep,
        )
        yield
        owned_client = getattr(app.state, "owned_http_client", None)
        if owned_client is not None:
            await owned_client.aclose()

    app_lifespan = lifespan if http_client is None else None
    # No docs or schema routes: every path belongs to the relay.
    app = FastAPI(
        title=settings.app_name,
        lifespan=app_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Keep test paths reliable when lifespan is not executed by the client.
    if http_client is not None:
        _ensure_runtime_state(
            app,
            settings=settings,
            http_client=http_client,
            cache=cache,
            sleep=sleep,
        )

    def _get_orchestrator(request: Request) -> Orchestrator:
        if not hasattr(request.app.state, "orchestrator"):
            _ensure_runtime_state(
                request.app,
                settings=settings,
                http_client=http_client,
                cache=cache,
                sleep=sleep,
            )
        return request.app.state.orchestrator

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "service": settings.app_name}

    @app.api_route("/{path:path}", methods=RELAY_METHODS)
    async def relay(request: Request) -> Response:
        if request.url.path.endswith(FAVICON_SUFFIX):
            return Response(content="", status_code=200)

        orchestrator = _get_orchestrator(request)
        response_cache: ResponseCache | None = request.app.state.cache
        use_cache = request.method == "GET" and response_cache is not None
        cache_key = str(request.url)

        if use_cache:
            cached = response_cache.get(cache_key)
            if cached is not None:
                logger.info("relay event=cache_hit url=%s", cache_key)
                return Response(
                    content=cached.body,
                    status_code=cached.status_code,
                    media_type=cached.media_type,
                    headers=cached.headers,
                )
            logger.info("relay event=cache_miss url=%s", cache_key)

        parameters = await _task_parameters(request, settings)
        try:
            result = await orchestrator.handle(parameters)
        except RelayError as exc:
            logger.error("relay event=failed route=%s reason=%s", parameters.route, exc)
            return PlainTextResponse(f"Error executing task: {exc}", status_code=500)
        except Exception as exc:  # noqa: BLE001
            logger.exception("relay event=failed route=%s", parameters.route)
            return PlainTextResponse(f"Error executing task: {exc}", status_code=500)

        if use_cache:
            response_cache.put(
                cache_key,
                CachedResponse(
                    body=result.body,
                    media_type=result.media_type,
                    headers={"Cache-Control": f"s-maxage={settings.cache_ttl_s}"},
                ),
                ttl_s=settings.cache_ttl_s,
            )

        return Response(
            content=result.body,
            media_type=result.media_type,
            headers={"run-id": result.run_id},
        )

    return app


async def _task_parameters(request: Request, settings: Settings) -> TaskParameters:
    try:
        raw_body = (await request.body()).decode("utf-8", errors="replace")
    except ClientDisconnect:
        logger.warning("relay event=body_unreadable route=%s", request.url.path)
        raw_body = ""

    geo = request.headers.get(settings.geo_header, "").strip() or settings.default_geo
    return TaskParameters.from_parts(
        route=request.url.path,
        method=request.method,
        geo=geo,
        body=raw_body,
        query=dict(request.query_params),
    )


# Module-level app for `uvicorn task_relay.api.main:app`.
app = create_app()
