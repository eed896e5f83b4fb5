"""
Response rendering and error handlers.

Turns tagged service results into HTTP responses and renders unparseable
request bodies with the standard errorsMessages shape.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from bloggers.domain.models import ApiErrorResult, FieldError
from bloggers.domain.results import Ok, Result

_REQUEST_PARTS = ("body", "query", "path", "header")


def render(result: Result) -> Response:
    """Ok -> JSON body with status; Status -> empty body with status."""
    if isinstance(result, Ok):
        return JSONResponse(status_code=int(result.status_code), content=result.body)
    return Response(status_code=int(result.status_code))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render framework-level request errors (e.g. malformed JSON) as 400."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        errors.append(FieldError(field=".".join(loc) or "body", message=error.get("msg", "invalid")))
    return JSONResponse(status_code=400, content=ApiErrorResult(errors).to_view())
