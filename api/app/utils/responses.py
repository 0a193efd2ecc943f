from decimal import Decimal
from typing import Any, Dict

from fastapi.encoders import jsonable_encoder


# Money is serialized as decimal strings.
MONEY = {Decimal: str}


def ok(data: Any) -> Dict[str, Any]:
    """Return a success envelope."""
    return {"ok": True, "data": jsonable_encoder(data, custom_encoder=MONEY)}


def err(
    code: int | str,
    message: str,
    details: Dict[str, Any] | None = None,
    hint: str | None = None,
) -> Dict[str, Any]:
    """Return an error envelope."""
    from ..middlewares.request_id import request_id_ctx

    error: Dict[str, Any] = {"code": code, "message": message}
    if hint:
        error["hint"] = hint
    if details:
        error["details"] = jsonable_encoder(details, custom_encoder=MONEY)

    return {"ok": False, "request_id": request_id_ctx.get(None), "error": error}
