"""
Versioned User API: Greeting Service (Validation + Response Building)
======================================================================

What:  Validates a user payload and turns the outcome into a versioned response.
Why:   v1 and v2 differ only in field names and response shape; the rules
       and message templates are written once here.
How:   find_empty_fields() → failing wire names (declaration order)
       GreetingService.greet() → formats the greeting or the failure
       message and hands (message, success) to a per-version response factory.
Who:   Called by the v1 and v2 user route handlers.

Validation rules:
    - FirstName / LastName fail when empty or whitespace-only
    - roles fail when the list is empty (individual roles are not inspected)

Everything here is a pure function of its input: no I/O, no shared state.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, List, Sequence, TypeVar

from app.schemas.user import UserRequestBase

ResponseT = TypeVar("ResponseT")

VALIDATION_FAILURE_PREFIX = "Incoming payload did not pass the validation on fields: "
GREETING_TEMPLATE = "Hello {first_name} {last_name}. Your roles are: {roles}"


def _is_blank(value: str) -> bool:
    return not value or not value.strip()


def find_empty_fields(payload: UserRequestBase) -> List[str]:
    """
    Return the wire names of required fields that are empty or missing.

    Order follows the model's required_fields declaration
    (first name, last name, roles). An empty list means the payload is valid.
    """
    first_field, last_field, roles_field = payload.required_fields
    failing = []
    if _is_blank(payload.first_name):
        failing.append(first_field)
    if _is_blank(payload.last_name):
        failing.append(last_field)
    if not payload.roles:
        failing.append(roles_field)
    return failing


def format_validation_failure(failing_fields: Sequence[str]) -> str:
    return VALIDATION_FAILURE_PREFIX + ", ".join(failing_fields)


def format_greeting(payload: UserRequestBase) -> str:
    return GREETING_TEMPLATE.format(
        first_name=payload.first_name,
        last_name=payload.last_name,
        roles=", ".join(payload.roles),
    )


@dataclass(frozen=True)
class GreetingOutcome(Generic[ResponseT]):
    """
    Result of handling one payload.

    failing_fields is the ValidationFailure: empty on success, otherwise the
    offending wire names. Routes map a non-empty list to HTTP 400.
    """

    response: ResponseT
    failing_fields: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.failing_fields


class GreetingService:
    """
    Stateless validate-then-format pipeline shared by every API version.

    Usage:
        outcome = greeting_service.greet(
            payload,
            lambda message, success: UserResponseV2(message=message, success=success),
        )
    """

    def greet(
        self,
        payload: UserRequestBase,
        build_response: Callable[[str, bool], ResponseT],
    ) -> GreetingOutcome[ResponseT]:
        failing = find_empty_fields(payload)
        if failing:
            return GreetingOutcome(
                response=build_response(format_validation_failure(failing), False),
                failing_fields=failing,
            )
        return GreetingOutcome(response=build_response(format_greeting(payload), True))


# Stateless: one shared instance is enough
greeting_service = GreetingService()
