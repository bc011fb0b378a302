"""Schema routes: type discovery and schema generation."""
import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

import config
from demo_forms import register_demo_types
from registry import Registry, TypeNotFoundError
from sources.errors import SchemaNotFoundError, SourceError
from sources.json_source import generate_from_json
from sources.openapi_source import generate_from_openapi
from sources.records import generate_json_schema, generate_ui_schema

logger = logging.getLogger(__name__)

registry = Registry()
register_demo_types(registry)

router = APIRouter(tags=["schema"])

# Optional request fields passed through to Options
OPTION_FIELDS = ("locale", "role", "draft")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


def generate_from_type(type_name: str, opts) -> dict:
    """Both schemas for a registered record type."""
    record = registry.lookup(type_name)
    return {
        "schema": generate_json_schema(record, opts).to_dict(),
        "uischema": generate_ui_schema(record, opts).to_dict(),
    }


@router.get("/api/v1/schema/types")
async def list_types():
    """Names accepted by the ``type`` field of /schema/generate."""
    names = registry.names()
    return {"status": "ok", "types": names, "count": len(names)}


@router.post("/api/v1/schema/generate")
async def generate(request: Request):
    """Generate a JSON Schema and a JSON Forms UI schema.

    Body (one source, checked in this order):
      {"type": "ContactForm"}                       — registered record type
      {"data": {...}}                               — sample JSON object
      {"openapi": {...}, "schema_name": "Pet"}      — OpenAPI component
    Optional: "locale", "role", "draft".
    """
    raw = await request.body()
    if not raw.strip():
        return _error(400, "request body is empty")

    try:
        body = json.loads(raw)
    except (ValueError, RecursionError):
        return _error(400, "invalid JSON in request body")
    if not isinstance(body, dict):
        return _error(400, "invalid JSON in request body")

    for key in OPTION_FIELDS:
        if body.get(key) is not None and not isinstance(body[key], str):
            return _error(400, f"\"{key}\" must be a string")

    opts = config.build_options(
        locale=body.get("locale"), role=body.get("role"), draft=body.get("draft")
    )

    try:
        if body.get("type"):
            result = generate_from_type(str(body["type"]), opts)
        elif "data" in body:
            data = body["data"]
            if not isinstance(data, dict):
                return _error(400, "top-level JSON value must be an object")
            schema, uischema = generate_from_json(data, opts)
            result = {"schema": schema.to_dict(), "uischema": uischema.to_dict()}
        elif body.get("openapi") is not None:
            if not body.get("schema_name"):
                return _error(400, "\"schema_name\" is required with \"openapi\"")
            schema, uischema = generate_from_openapi(body["openapi"], str(body["schema_name"]), opts)
            result = {"schema": schema.to_dict(), "uischema": uischema.to_dict()}
        else:
            return _error(400, "request must contain \"type\", \"data\" or \"openapi\" field")
    except (TypeNotFoundError, SchemaNotFoundError) as e:
        logger.warning("Schema generation failed: %s", e)
        return _error(404, str(e))
    except SourceError as e:
        logger.warning("Schema generation failed: %s", e)
        return _error(400, str(e))
    except RecursionError:
        logger.warning("Schema generation failed: input nested too deeply")
        return _error(400, "input is nested too deeply")

    return JSONResponse(result)
