"""
Versioned User API: POST /User (api-version=2)
================================================

Request:   {"FirstName": str, "LastName": str, "UserRoles": [str]}
Responses: 200 {"Message": "...", "Success": true}
           400 {"Message": "...on fields: LastName, UserRoles", "Success": false}

Changes from v1:
    - userRole renamed to UserRoles
    - response carries an explicit Success flag
"""

from typing import Optional

from fastapi import Query

from app.routes.users import USER_PATH, send_outcome
from app.schemas.user import UserRequestV2, UserResponseV2
from app.services.greeting_service import greeting_service
from app.versioning import API_VERSION_QUERY_PARAM, versioned_router

router = versioned_router("2", tags=["User"])


def build_response(message: str, success: bool) -> UserResponseV2:
    return UserResponseV2(message=message, success=success)


@router.post(
    USER_PATH,
    response_model=UserResponseV2,
    responses={
        200: {"description": "Greeting for a valid payload", "model": UserResponseV2},
        400: {"description": "Payload failed validation", "model": UserResponseV2},
    },
    summary="Greet a user (v2)",
    description=(
        "Validates the user payload and returns a greeting listing the user's roles, "
        "with an explicit Success flag."
    ),
)
async def post_user(
    user: UserRequestV2,
    api_version: Optional[str] = Query(
        default=None,
        alias=API_VERSION_QUERY_PARAM,
        description="The requested API version",
    ),
):
    outcome = greeting_service.greet(user, build_response)
    return send_outcome(outcome)
