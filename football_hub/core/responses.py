"""Envelope padrão de resposta da API"""
from typing import Any, Optional


def success_response(data: Any = None, message: str = "Success", meta: Optional[dict] = None) -> dict:
    """Monta o envelope {success, message, data, meta?}"""
    body = {"success": True, "message": message, "data": data}
    if meta is not None:
        body["meta"] = meta
    return body
