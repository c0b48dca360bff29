"""Record types and request schemas.

Records travel as camelCase JSON (``invoiceNumber``, ``createdAt``) while the
Python attributes stay snake_case; every model shares the alias config below.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, ClassVar, Optional, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class EnquiryPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class EnquiryStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


Money = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]


def _as_utc(value: datetime) -> datetime:
    # date-only and offset-less input is read as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class User(CamelModel):
    """Stored user. ``password`` holds the bcrypt hash, never plaintext."""
    id: int
    username: str
    password: str
    email: str
    name: str


class UserPublic(CamelModel):
    id: int
    username: str
    email: str
    name: str


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: EmailStr
    name: str = Field(min_length=1)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthResponse(CamelModel):
    token: str
    user: UserPublic


class ProfileResponse(CamelModel):
    user: UserPublic


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------

class ClientCreate(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    company: Optional[str] = None


class Client(ClientCreate):
    id: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------

class InvoiceItem(CamelModel):
    description: str = Field(min_length=1)
    quantity: float = Field(ge=1)
    rate: float = Field(ge=0)
    amount: float = Field(ge=0)


class InvoiceCreate(CamelModel):
    # subtotal/tax/total are taken as submitted; nothing here checks them
    # against the items.
    client_id: int
    issue_date: UtcDatetime
    due_date: UtcDatetime
    status: InvoiceStatus
    subtotal: Money
    tax: Money
    total: Money
    notes: Optional[str] = None
    items: list[InvoiceItem] = Field(min_length=1)


class Invoice(InvoiceCreate):
    id: int
    invoice_number: str
    created_at: datetime


# ---------------------------------------------------------------------------
# Enquiries
# ---------------------------------------------------------------------------

class EnquiryCreate(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    company: Optional[str] = None
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)
    priority: EnquiryPriority = EnquiryPriority.MEDIUM
    status: EnquiryStatus = EnquiryStatus.OPEN


class Enquiry(EnquiryCreate):
    id: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Patches
# ---------------------------------------------------------------------------

class Patch(CamelModel):
    """Partial update payload.

    Every field is optional. Names listed in ``required_fields`` are
    mandatory on the record itself, so an explicit ``null`` is rejected
    for them instead of being merged.
    """
    required_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null_required(cls, value, info: ValidationInfo):
        if value is None and info.field_name in cls.required_fields:
            alias = cls.model_fields[info.field_name].alias or info.field_name
            raise PydanticCustomError(
                "null_not_allowed", "{field} may not be null", {"field": alias}
            )
        return value


class ClientPatch(Patch):
    required_fields = frozenset({"name", "email"})

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    company: Optional[str] = None


class InvoicePatch(Patch):
    required_fields = frozenset({
        "client_id", "issue_date", "due_date", "status",
        "subtotal", "tax", "total", "items",
    })

    client_id: Optional[int] = None
    issue_date: Optional[UtcDatetime] = None
    due_date: Optional[UtcDatetime] = None
    status: Optional[InvoiceStatus] = None
    subtotal: Optional[Money] = None
    tax: Optional[Money] = None
    total: Optional[Money] = None
    notes: Optional[str] = None
    items: Optional[list[InvoiceItem]] = Field(default=None, min_length=1)


class EnquiryPatch(Patch):
    required_fields = frozenset({"name", "email", "subject", "message", "priority", "status"})

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    subject: Optional[str] = Field(default=None, min_length=1)
    message: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[EnquiryPriority] = None
    status: Optional[EnquiryStatus] = None


RecordT = TypeVar("RecordT", bound=CamelModel)


def merge_patch(base: RecordT, patch: Patch) -> RecordT:
    """Return a new record with the patch's explicitly-set fields applied.

    Patch values win over the base; fields absent from the patch keep their
    stored value. The result is validated as a full record.
    """
    merged = base.model_dump()
    merged.update(patch.model_dump(exclude_unset=True))
    return type(base).model_validate(merged)


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

class Stats(CamelModel):
    total_revenue: float = 0.0
    pending_invoices: int = 0
    active_clients: int = 0
    open_enquiries: int = 0
