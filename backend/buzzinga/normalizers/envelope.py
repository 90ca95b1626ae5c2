from typing import Any, Dict, Optional


def envelope(
    data: Any = None,
    *,
    message: Optional[str] = None,
    pagination: Optional[Dict[str, int]] = None,
    success: bool = True,
) -> Dict[str, Any]:
    """
    Shape the response body shared by every endpoint:
    ``{success, message?, data?, pagination?}``.
    """
    body: Dict[str, Any] = {"success": success}

    if message is not None:
        body["message"] = message

    if data is not None:
        body["data"] = data

    if pagination is not None:
        body["pagination"] = pagination

    return body
