import logging
from typing import Optional

from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import SchedulingError

logger = logging.getLogger(__name__)


def scheduling_exception_handler(exc, context) -> Optional[Response]:
    """DRF exception handler: render SchedulingError, defer everything else to DRF."""
    if isinstance(exc, SchedulingError):
        view = context.get("view")
        logger.warning(
            "Rejected request in %s: %s (%s)",
            type(view).__name__ if view is not None else "unknown view",
            exc.message,
            exc.code,
        )
        return Response(exc.to_response(), status=exc.status_code)
    return exception_handler(exc, context)
