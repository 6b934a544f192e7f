from typing import Any, List

from pydantic import BaseModel


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_dump(d) for d in data]
    return data


def envelope(data: Any = None, message: str = "OK") -> dict:
    """Success body shared by every route: {success, data, message}."""
    return {"success": True, "data": _dump(data), "message": message}


def error_body(status_code: int, message: Any, error: str) -> dict:
    return {"statusCode": status_code, "message": message, "error": error}


def validation_messages(errors: List[dict]) -> List[str]:
    messages = []
    for err in errors:
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg", "Invalid value"))
    return messages
