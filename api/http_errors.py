from fastapi import HTTPException

from errors import InvalidTransitionError, NotFoundError


def to_http(exc: Exception) -> HTTPException:
    """Domain error to response: missing rows 404, illegal transitions 409, rejected input 422."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidTransitionError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))
