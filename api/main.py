#!/usr/bin/env python3
"""ui-json-schema API — JSON Schema + JSON Forms UI schema generation.

Routes:
  POST /api/v1/schema/generate  — Generate both schemas (type, data or openapi)
  GET  /api/v1/schema/types     — List registered record types
  GET  /api/v1/health           — Health check
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from routes import router as schema_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="ui-json-schema API", version="0.5.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.CORS_ORIGIN] if not config.IS_DEV else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schema_router)


# ── Middleware ────────────────────────────────────────────────────────────────

@app.middleware("http")
async def payload_limit_middleware(request: Request, call_next):
    """Reject bodies larger than MAX_BODY_SIZE before they are read."""
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > config.MAX_BODY_SIZE:
        logger.warning("Rejected %s %s: body of %s bytes", request.method, request.url.path, content_length)
        return JSONResponse(
            {"status": "error", "message": "Request body too large (max 2MB)"},
            status_code=413,
        )
    return await call_next(request)


# ── Health ────────────────────────────────────────────────────────────────────

@app.get("/api/v1/health")
async def health():
    return {"status": "ok", "service": "ui-json-schema"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
