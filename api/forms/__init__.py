"""JSON Schema and JSON Forms UI schema generation engine."""
