"""
Versioned User API: Shared User Route Helpers
===============================================

What:  HTTP mapping shared by every version of POST /User.
Why:   The versioned route modules (users_v1, users_v2) only differ in their
       models; turning a GreetingOutcome into an HTTP response is identical.

Status mapping:
    valid payload      → 200 with the versioned response body
    validation failure → 400 with the versioned response body (NOT the
                         ErrorResponse envelope: clients of each version
                         parse one shape only)
"""

import logging
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.middleware.request_id import request_id_var
from app.services.greeting_service import GreetingOutcome, VALIDATION_FAILURE_PREFIX

logger = logging.getLogger(__name__)

USER_PATH = "/User"


def send_outcome(outcome: GreetingOutcome[BaseModel]) -> Any:
    """Return the response model on success, a 400 JSONResponse on failure."""
    if outcome.is_valid:
        return outcome.response

    logger.error(
        "[%s] %s%s",
        request_id_var.get(""),
        VALIDATION_FAILURE_PREFIX,
        outcome.failing_fields,
    )
    return JSONResponse(
        status_code=400,
        content=outcome.response.model_dump(by_alias=True),
    )
