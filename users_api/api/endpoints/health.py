"""Health check endpoints."""

from fastapi import APIRouter, status

from users_api.core.exceptions import DatabaseError
from users_api.core.workers import run_blocking
from users_api.dependencies import UserServiceDep
from users_api.schemas.response import GenericResponse

router = APIRouter()


@router.get(
    "/",
    response_model=GenericResponse[None],
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Basic health check",
)
async def health_checker() -> GenericResponse[None]:
    """
    Basic health check endpoint.

    Returns:
        Envelope with no payload
    """
    return GenericResponse[None](message="Working")


@router.get(
    "/health",
    response_model=GenericResponse[dict[str, str]],
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Database health check",
)
async def detailed_health_check(user_service: UserServiceDep) -> GenericResponse[dict[str, str]]:
    """
    Health check including a round trip through the connection pool.

    Returns:
        Envelope reporting the database status
    """
    db_healthy = await run_blocking(user_service.check_connection, failure=DatabaseError)

    return GenericResponse[dict[str, str]](
        message="Healthy" if db_healthy else "Degraded",
        data={"database": "healthy" if db_healthy else "unhealthy"},
    )
