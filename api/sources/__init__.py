"""Record descriptions from dataclasses, raw JSON and OpenAPI documents."""
