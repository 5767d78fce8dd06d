import http
import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse

from ...exceptions import HALGeneratorException

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


async def hal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Translates a :py:class:`HALGeneratorException` into a problem details response.
    """
    assert isinstance(exc, HALGeneratorException)
    status = exc.status
    if status < 500:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.error(
            "%s on %s: %s", type(exc).__name__, request.url.path, exc.message, exc_info=exc
        )
    return JSONResponse(
        {
            "type": "about:blank",
            "title": http.HTTPStatus(status).phrase,
            "status": status,
            "detail": exc.message,
        },
        status_code=status,
        media_type=PROBLEM_MEDIA_TYPE,
    )


def register_exception_handlers(app: Starlette) -> None:
    app.add_exception_handler(HALGeneratorException, hal_exception_handler)
