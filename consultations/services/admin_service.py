import logging

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from consultations.core.exceptions import InvalidInputError, NotFoundError
from consultations.core.security import create_access_token, get_password_hash, verify_password
from consultations.db.models import Admin
from consultations.schemas.admin import AdminCreateRequest, LoginRequest, TokenResponse

logger = logging.getLogger(__name__)

ADMIN_NOT_FOUND_DETAIL = "Admin not found"
USERNAME_TAKEN_DETAIL = "Username already exists"
EMAIL_TAKEN_DETAIL = "Email already exists"
SELF_DELETE_DETAIL = "Cannot delete your own account"
LAST_ADMIN_DETAIL = "Cannot delete the last admin account"
INVALID_CREDENTIALS_DETAIL = "Invalid credentials"


def authenticate_admin(db: Session, payload: LoginRequest) -> TokenResponse:
    identifier = payload.username.strip()
    admin = db.scalar(
        select(Admin).where(or_(Admin.username == identifier, Admin.email == identifier.lower()))
    )
    if not admin or not verify_password(payload.password, admin.hashed_password):
        logger.info("admin_login_failed identifier=%s", identifier)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS_DETAIL,
        )

    logger.info("admin_login id=%s", admin.id)
    return TokenResponse(access_token=create_access_token(admin_id=admin.id, username=admin.username))


def get_admin(db: Session, admin_id: int) -> Admin:
    admin = db.get(Admin, admin_id)
    if not admin:
        raise NotFoundError(ADMIN_NOT_FOUND_DETAIL)
    return admin


def list_admins(db: Session) -> list[Admin]:
    return list(db.scalars(select(Admin).order_by(Admin.id)).all())


def create_admin(db: Session, payload: AdminCreateRequest) -> Admin:
    username = payload.username.strip()
    email = payload.email.lower()
    if db.scalar(select(Admin.id).where(Admin.username == username)):
        raise InvalidInputError(USERNAME_TAKEN_DETAIL)
    if db.scalar(select(Admin.id).where(Admin.email == email)):
        raise InvalidInputError(EMAIL_TAKEN_DETAIL)

    admin = Admin(
        username=username,
        email=email,
        hashed_password=get_password_hash(payload.password),
        role="admin",
    )
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(USERNAME_TAKEN_DETAIL) from None

    db.refresh(admin)
    logger.info("admin_created id=%s username=%s", admin.id, admin.username)
    return admin


def delete_admin(db: Session, admin_id: int, current_admin: Admin) -> None:
    if admin_id == current_admin.id:
        raise InvalidInputError(SELF_DELETE_DETAIL)

    admin = get_admin(db, admin_id)
    if db.scalar(select(func.count()).select_from(Admin)) <= 1:
        raise InvalidInputError(LAST_ADMIN_DETAIL)

    db.delete(admin)
    db.commit()
    logger.info("admin_deleted id=%s by=%s", admin_id, current_admin.id)


def update_admin_password(db: Session, admin_id: int, new_password: str) -> Admin:
    admin = get_admin(db, admin_id)
    admin.hashed_password = get_password_hash(new_password)
    db.commit()
    db.refresh(admin)
    logger.info("admin_password_updated id=%s", admin.id)
    return admin
