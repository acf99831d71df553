"""Health check endpoint.

GET /api/health: public status, or detailed checks with a Bearer token.
"""

import time
from typing import Any

import structlog
from aiohttp import web

log = structlog.get_logger()

_VERSION = "1.0.0"
_START_TIME = time.monotonic()
_OPENROUTER_MODELS_URL = "https://openrouter.ai/api/v1/models"


def _elapsed_ms(t0: float) -> int:
    return round((time.monotonic() - t0) * 1000)


async def health_handler(request: web.Request) -> web.Response:
    """Health check: public or detailed depending on Bearer token.

    database and redis are critical (``down``); the generation provider is
    not, since replies fall back to templated content (``degraded``).
    """
    auth = request.headers.get("Authorization", "")
    settings = request.app["settings"]
    token = settings.health_check_token.get_secret_value()

    # Public response: no version, no details
    if not token or not auth.startswith("Bearer ") or auth[7:] != token:
        return web.json_response({"status": "ok"})

    checks: dict[str, dict[str, Any]] = {}
    overall = "ok"

    t0 = time.monotonic()
    try:
        db = request.app["db"]
        await db.table("user_profiles").select("id").limit(1).execute()
        checks["database"] = {"status": "ok", "latency_ms": _elapsed_ms(t0)}
    except Exception:
        checks["database"] = {"status": "error", "latency_ms": _elapsed_ms(t0)}
        overall = "down"
        log.warning("health_db_failed", exc_info=True)

    t0 = time.monotonic()
    redis = request.app["redis"]
    is_ok = await redis.ping()  # never raises, logs its own failure
    checks["redis"] = {"status": "ok" if is_ok else "error", "latency_ms": _elapsed_ms(t0)}
    if not is_ok:
        overall = "down"

    try:
        http_client = request.app["http_client"]
        resp = await http_client.get(_OPENROUTER_MODELS_URL, timeout=5.0)
        checks["openrouter"] = {"status": "ok" if resp.status_code == 200 else "error"}
        if resp.status_code != 200 and overall != "down":
            overall = "degraded"
    except Exception:
        checks["openrouter"] = {"status": "error"}
        if overall != "down":
            overall = "degraded"
        log.warning("health_openrouter_failed", exc_info=True)

    return web.json_response({
        "status": overall,
        "version": _VERSION,
        "uptime_seconds": round(time.monotonic() - _START_TIME),
        "checks": checks,
    })
