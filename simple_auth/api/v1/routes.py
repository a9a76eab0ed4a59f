"""
API v1 routes.

Defines REST endpoints for the registration API.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from simple_auth.api.dependencies import get_registration_service
from simple_auth.api.models import ErrorResponse, RegisterRequest, RegisterResponse
from simple_auth.domain.exceptions import AlreadyExistsError, InternalError, ValidationError
from simple_auth.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Username already taken"},
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal error"},
        503: {"model": ErrorResponse, "description": "Credential store unavailable"},
    },
    summary="Register a new user",
    description="Submit a username and password. The password is hashed with bcrypt "
    "and a credential record is created if the username is free.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new user.

    - **username**: Requested username (exact, case-sensitive)
    - **password**: Password (any non-empty string)

    Declared as a plain def: FastAPI runs it on the threadpool, so bcrypt
    and blocking store I/O do not stall the event loop.
    """
    try:
        result = service.register(request_data.username, request_data.password)
    except ValidationError:
        raise HTTPException(
            status_code=422,
            detail="Invalid registration request",
        ) from None
    except AlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists",
        ) from None
    except InternalError as exc:
        # Same opaque detail either way; 503 tells the caller a retry may help
        raise HTTPException(
            status_code=(
                status.HTTP_503_SERVICE_UNAVAILABLE
                if exc.retryable
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            detail="Internal server error",
        ) from None
    return RegisterResponse(message=result.message)
