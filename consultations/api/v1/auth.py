from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from consultations.api.deps import get_current_admin
from consultations.core.config import settings
from consultations.core.rate_limiter import login_throttle
from consultations.db.models import Admin
from consultations.db.session import get_db
from consultations.schemas.admin import AdminEnvelope, AdminResponse, LoginRequest, TokenResponse
from consultations.services.admin_service import authenticate_admin

router = APIRouter(prefix="/auth", tags=["auth"])


def _rate_limit_or_raise(request: Request, response: Response) -> None:
    client_ip = request.client.host if request.client else "unknown"
    retry_after = login_throttle.hit(
        client_ip,
        limit=settings.auth_login_max_attempts,
        window_seconds=settings.auth_rate_limit_window_seconds,
    )
    if retry_after:
        response.headers["Retry-After"] = str(retry_after)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again later.",
            headers={"Retry-After": str(retry_after)},
        )


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> TokenResponse:
    _rate_limit_or_raise(request=request, response=response)
    return authenticate_admin(db, payload)


@router.get("/me", response_model=AdminEnvelope, status_code=status.HTTP_200_OK)
def me(current_admin: Admin = Depends(get_current_admin)) -> AdminEnvelope:
    return AdminEnvelope(admin=AdminResponse.model_validate(current_admin))
