from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from tillauth.api.error import ClientError, ServerError
from tillauth.api.utils.auth_gate import AuthenticatedPrincipal
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.app.use_cases.sessions import (
    GetSessionReportUseCase,
    PurgeSessionsResponse,
    PurgeSessionsUseCase,
    SessionReportResponse,
)
from tillauth.depends import get_unit_of_work, require_admin

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("/report", status_code=status.HTTP_200_OK, response_model=SessionReportResponse)
async def session_report(
    request: Request,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Session Activity Report

    One entry per user per day in the lookback window with the total
    logged-in minutes and an Active / Logged Out status. Overlapping sessions
    (several devices) are counted once.

    Raises:
        - 401/403: Not authenticated or not an admin
    """
    use_case = GetSessionReportUseCase(
        uow,
        tz=request.app.state.reference_tz,
        lookback_days=request.app.state.session_lookback_days,
        retention_days=request.app.state.session_retention_days,
    )
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class PurgeSessionsRequest(BaseModel):
    retention_days: int = Field(..., description="Delete records logged in before this many days ago")


@router.post("/purge", status_code=status.HTTP_200_OK, response_model=PurgeSessionsResponse)
async def purge_sessions(
    body: PurgeSessionsRequest,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Purge Old Session Records

    Raises:
        - 400 Bad Request: retention_days below one
        - 401/403: Not authenticated or not an admin
    """
    use_case = PurgeSessionsUseCase(uow)
    result = await use_case.execute(body.retention_days)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_RETENTION":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
