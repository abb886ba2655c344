# hostel_admin/api/responses.py
"""
Render service results as the standard JSON envelope.

Success: ``{"success": true, "data": ..., "message"?: ..., "pagination"?: ...}``
Failure: ``{"success": false, "error": {"code", "message", "details"}}``
"""

from typing import Any, Optional, Type

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hostel_admin.services.base import ServiceResult


def _serialize(data: Any, schema: Optional[Type[BaseModel]]) -> Any:
    if schema is None or data is None:
        return data
    if isinstance(data, (list, tuple)):
        return [schema.model_validate(item) for item in data]
    return schema.model_validate(data)


def render(
    result: ServiceResult,
    schema: Optional[Type[BaseModel]] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Turn a ``ServiceResult`` into a JSON response.

    Args:
        result: Outcome of a service call
        schema: Response schema used to serialize ORM objects
        status_code: Status for a successful result; failures use the
            status mapped from their error code
    """
    if not result.is_success:
        return JSONResponse(
            status_code=result.error.status_code,
            content=jsonable_encoder({"success": False, "error": result.error.to_dict()}),
        )

    body = {"success": True, "data": _serialize(result.data, schema)}
    if result.message:
        body["message"] = result.message
    metadata = result.metadata or {}
    if "pagination" in metadata:
        body["pagination"] = metadata["pagination"]

    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def created(result: ServiceResult, schema: Optional[Type[BaseModel]] = None) -> JSONResponse:
    return render(result, schema, status_code=status.HTTP_201_CREATED)


__all__ = ["render", "created"]
