# app/shared/utils/responses.py

from typing import Any, Dict


def envelope(message: str, data: Any = None, **extra: Any) -> Dict[str, Any]:
    """
    Build the success envelope returned by every endpoint.

    Args:
        message: Human readable outcome
        data: Payload, omitted when None
        **extra: Additional top-level fields (token, pagination)

    Returns:
        {"success": True, "message": ..., "data"?: ..., **extra}
    """
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    body.update({key: value for key, value in extra.items() if value is not None})
    return body
