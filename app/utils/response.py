from typing import Any, Optional, List, Dict
from fastapi.responses import JSONResponse

from app.utils.pagination import Pagination
from app.utils.serializers import serialize_document, serialize_value


def success_response(
    message: str = "Success",
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """
    Standard success envelope: {"success": true, "message": ..., "data": ...}

    Datetimes and ObjectIds inside data are converted to strings.
    """
    response = {
        "success": True,
        "message": message
    }

    if data is not None:
        response["data"] = serialize_value(data)

    return JSONResponse(content=response, status_code=status_code)


def paginated_response(
    key: str,
    documents: List[Dict],
    pagination: Pagination,
    total: int,
    message: str = "Success"
) -> JSONResponse:
    """Success envelope for one page of store documents plus page info"""
    return success_response(
        message=message,
        data={
            key: [serialize_document(doc) for doc in documents],
            "pagination": pagination.meta(total)
        }
    )


def error_response(
    message: str = "Error",
    status_code: int = 400
) -> JSONResponse:
    """Standard error envelope: {"success": false, "message": ...}"""
    return JSONResponse(
        content={
            "success": False,
            "message": message
        },
        status_code=status_code
    )


def validation_error_response(
    message: str = "Validation error",
    errors: Optional[List[Dict[str, Any]]] = None,
    status_code: int = 400
) -> JSONResponse:
    """Error envelope with the per-field problems of a rejected request"""
    response = {
        "success": False,
        "message": message
    }

    if errors:
        response["errors"] = errors

    return JSONResponse(content=response, status_code=status_code)
