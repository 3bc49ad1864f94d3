"""
Versioned User API: POST /User (api-version=1)
================================================

Request:   {"FirstName": str, "LastName": str, "userRole": [str]}
Responses: 200 {"Message": "Hello Ada Lovelace. Your roles are: admin"}
           400 {"Message": "Incoming payload did not pass the validation on fields: FirstName"}

Also served when no api-version is given (1 is the default version).
"""

from typing import Optional

from fastapi import Query

from app.routes.users import USER_PATH, send_outcome
from app.schemas.user import UserRequestV1, UserResponseV1
from app.services.greeting_service import greeting_service
from app.versioning import API_VERSION_QUERY_PARAM, versioned_router

router = versioned_router("1", tags=["User"])


def build_response(message: str, success: bool) -> UserResponseV1:
    # v1 has no success flag; the status code carries it
    return UserResponseV1(message=message)


@router.post(
    USER_PATH,
    response_model=UserResponseV1,
    responses={
        200: {"description": "Greeting for a valid payload", "model": UserResponseV1},
        400: {"description": "Payload failed validation", "model": UserResponseV1},
    },
    summary="Greet a user (v1)",
    description="Validates the user payload and returns a greeting listing the user's roles.",
)
async def post_user(
    user: UserRequestV1,
    api_version: Optional[str] = Query(
        default=None,
        alias=API_VERSION_QUERY_PARAM,
        description="The requested API version (defaults to 1 when omitted)",
    ),
):
    outcome = greeting_service.greet(user, build_response)
    return send_outcome(outcome)
