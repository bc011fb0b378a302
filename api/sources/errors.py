"""Errors raised while turning an input document into a record description."""


class SourceError(Exception):
    """Base class for all source errors (mapped to HTTP 4xx by the API)."""


class InvalidJSONError(SourceError):
    def __init__(self, detail: str = "") -> None:
        super().__init__(f"invalid JSON: {detail}" if detail else "invalid JSON")


class NotJSONObjectError(SourceError):
    def __init__(self) -> None:
        super().__init__("top-level JSON value must be an object")


class InvalidOpenAPIError(SourceError):
    def __init__(self, detail: str = "") -> None:
        msg = "invalid OpenAPI document"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class SchemaNotFoundError(SourceError):
    def __init__(self, name: str) -> None:
        super().__init__(f"schema not found in OpenAPI document: {name!r}")
        self.name = name


class NotARecordError(SourceError):
    def __init__(self, obj: object) -> None:
        super().__init__(f"expected a dataclass type or instance, got {type(obj).__name__}")
