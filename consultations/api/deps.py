from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from consultations.core.security import decode_access_token
from consultations.db.models import Admin
from consultations.db.session import get_db

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_current_admin(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Admin:
    unauthorized_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        admin_id = int(payload.get("sub", ""))
    except (ValueError, TypeError):
        raise unauthorized_exc

    admin = db.get(Admin, admin_id)
    if not admin:
        raise unauthorized_exc
    return admin
