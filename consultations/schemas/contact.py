from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from consultations.schemas.booking import Pagination


class ContactCreateRequest(BaseModel):
    name: Any = None
    email: Any = None
    subject: Any = None
    message: Any = None


class ContactStatusUpdateRequest(BaseModel):
    status: Any = None


class ContactBulkDeleteRequest(BaseModel):
    ids: Any = None


class ContactResponse(BaseModel):
    id: int
    name: str
    email: str
    subject: str | None
    message: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactCreatedSummary(BaseModel):
    id: int
    name: str
    email: str
    subject: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactCreatedResponse(BaseModel):
    success: bool = True
    message: str
    contact: ContactCreatedSummary


class ContactEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    contact: ContactResponse


class ContactListResponse(BaseModel):
    success: bool = True
    contacts: list[ContactResponse]
    pagination: Pagination


class ContactStats(BaseModel):
    total: int
    new: int
    read: int
    responded: int
    response_rate: float = Field(alias="responseRate")

    model_config = ConfigDict(populate_by_name=True)


class ContactStatsResponse(BaseModel):
    success: bool = True
    stats: ContactStats
