from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from consultations.schemas.booking import BookingResponse


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=255, description="Username or email")
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminCreateRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class AdminPasswordUpdateRequest(BaseModel):
    new_password: str = Field(min_length=8, max_length=128, alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)


class AdminResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    admin: AdminResponse


class AdminListResponse(BaseModel):
    success: bool = True
    admins: list[AdminResponse]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class DashboardStats(BaseModel):
    total_bookings: int = Field(alias="totalBookings")
    today_bookings: int = Field(alias="todayBookings")
    pending_bookings: int = Field(alias="pendingBookings")
    confirmed_bookings: int = Field(alias="confirmedBookings")
    completed_bookings: int = Field(alias="completedBookings")
    cancelled_bookings: int = Field(alias="cancelledBookings")
    new_contacts: int = Field(alias="newContacts")
    active_subscribers: int = Field(alias="activeSubscribers")

    model_config = ConfigDict(populate_by_name=True)


class DashboardResponse(BaseModel):
    success: bool = True
    stats: DashboardStats
    recent_bookings: list[BookingResponse] = Field(alias="recentBookings")

    model_config = ConfigDict(populate_by_name=True)
