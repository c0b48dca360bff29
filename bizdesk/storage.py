"""In-memory record store.

Holds the user, client, invoice and enquiry tables for the lifetime of the
process. Nothing is persisted; a restart starts from empty tables.
"""

import itertools
import logging
import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional, TypeVar

from fastapi import Request

from .models import (
    CamelModel,
    Client,
    ClientCreate,
    ClientPatch,
    Enquiry,
    EnquiryCreate,
    EnquiryPatch,
    EnquiryStatus,
    Invoice,
    InvoiceCreate,
    InvoicePatch,
    InvoiceStatus,
    Stats,
    User,
    merge_patch,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CamelModel)

PENDING_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


def format_invoice_number(year: int, seq: int) -> str:
    """Invoice number: INV-YYYY-NNN"""
    return f"INV-{year}-{seq:03d}"


class DuplicateUserError(ValueError):
    """Username or email already belongs to another user."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field.capitalize()} already exists")


class _Table:
    """One keyed table with its own id sequence."""

    def __init__(self, name: str):
        self.name = name
        self.rows: dict[int, CamelModel] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)


class MemStorage:
    """Map-backed store for all record types.

    Ids are sequential per table and never reused, even after deletes.
    All access goes through one re-entrant lock because FastAPI serves
    sync handlers from a thread pool. Records are copied on the way in
    and out so callers never hold a reference into the tables.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = threading.RLock()
        self._users = _Table("users")
        self._clients = _Table("clients")
        self._invoices = _Table("invoices")
        self._enquiries = _Table("enquiries")
        self._invoice_numbers = itertools.count(1)

    # -- generic helpers ----------------------------------------------------

    def _list(self, table: _Table) -> list:
        with self._lock:
            rows = [r.model_copy(deep=True) for r in table.rows.values()]
        return sorted(rows, key=lambda r: (r.created_at, r.id), reverse=True)

    def _get(self, table: _Table, record_id: int):
        with self._lock:
            row = table.rows.get(record_id)
            return row.model_copy(deep=True) if row is not None else None

    def _update(self, table: _Table, record_id: int, patch) -> Optional[RecordT]:
        with self._lock:
            existing = table.rows.get(record_id)
            if existing is None:
                return None
            updated = merge_patch(existing, patch)
            table.rows[record_id] = updated
            logger.debug(
                f"Updated {table.name}#{record_id}: "
                f"{sorted(patch.model_fields_set)}"
            )
            return updated.model_copy(deep=True)

    def _delete(self, table: _Table, record_id: int) -> bool:
        with self._lock:
            found = table.rows.pop(record_id, None) is not None
        if found:
            logger.debug(f"Deleted {table.name}#{record_id}")
        return found

    # -- users --------------------------------------------------------------

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(self._users, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.rows.values():
                if user.username == username:
                    return user.model_copy()
        return None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.rows.values():
                if user.email == email:
                    return user.model_copy()
        return None

    def create_user(self, username: str, password_hash: str, email: str, name: str) -> User:
        """Insert a user; raises DuplicateUserError if username or email is taken."""
        with self._lock:
            if self.get_user_by_username(username) is not None:
                raise DuplicateUserError("username")
            if self.get_user_by_email(email) is not None:
                raise DuplicateUserError("email")
            user = User(
                id=self._users.next_id(),
                username=username,
                password=password_hash,
                email=email,
                name=name,
            )
            self._users.rows[user.id] = user
        logger.debug(f"Created users#{user.id} ({username})")
        return user.model_copy()

    # -- clients ------------------------------------------------------------

    def get_clients(self) -> list[Client]:
        return self._list(self._clients)

    def get_client(self, client_id: int) -> Optional[Client]:
        return self._get(self._clients, client_id)

    def create_client(self, data: ClientCreate) -> Client:
        with self._lock:
            client = Client(
                **data.model_dump(),
                id=self._clients.next_id(),
                created_at=self._clock(),
            )
            self._clients.rows[client.id] = client
        logger.debug(f"Created clients#{client.id}")
        return client.model_copy(deep=True)

    def update_client(self, client_id: int, patch: ClientPatch) -> Optional[Client]:
        return self._update(self._clients, client_id, patch)

    def delete_client(self, client_id: int) -> bool:
        return self._delete(self._clients, client_id)

    # -- invoices -----------------------------------------------------------

    def get_invoices(self) -> list[Invoice]:
        return self._list(self._invoices)

    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        return self._get(self._invoices, invoice_id)

    def get_invoices_by_client(self, client_id: int) -> list[Invoice]:
        return [inv for inv in self.get_invoices() if inv.client_id == client_id]

    def create_invoice(self, data: InvoiceCreate) -> Invoice:
        with self._lock:
            now = self._clock()
            invoice = Invoice(
                **data.model_dump(),
                id=self._invoices.next_id(),
                invoice_number=format_invoice_number(now.year, next(self._invoice_numbers)),
                created_at=now,
            )
            self._invoices.rows[invoice.id] = invoice
        logger.debug(f"Created invoices#{invoice.id} {invoice.invoice_number}")
        return invoice.model_copy(deep=True)

    def update_invoice(self, invoice_id: int, patch: InvoicePatch) -> Optional[Invoice]:
        return self._update(self._invoices, invoice_id, patch)

    def delete_invoice(self, invoice_id: int) -> bool:
        return self._delete(self._invoices, invoice_id)

    # -- enquiries ----------------------------------------------------------

    def get_enquiries(self) -> list[Enquiry]:
        return self._list(self._enquiries)

    def get_enquiry(self, enquiry_id: int) -> Optional[Enquiry]:
        return self._get(self._enquiries, enquiry_id)

    def create_enquiry(self, data: EnquiryCreate) -> Enquiry:
        with self._lock:
            enquiry = Enquiry(
                **data.model_dump(),
                id=self._enquiries.next_id(),
                created_at=self._clock(),
            )
            self._enquiries.rows[enquiry.id] = enquiry
        logger.debug(f"Created enquiries#{enquiry.id}")
        return enquiry.model_copy(deep=True)

    def update_enquiry(self, enquiry_id: int, patch: EnquiryPatch) -> Optional[Enquiry]:
        return self._update(self._enquiries, enquiry_id, patch)

    def delete_enquiry(self, enquiry_id: int) -> bool:
        return self._delete(self._enquiries, enquiry_id)

    # -- statistics ---------------------------------------------------------

    def get_stats(self) -> Stats:
        """Dashboard figures, recomputed by a full scan on every call."""
        with self._lock:
            invoices = list(self._invoices.rows.values())
            enquiries = list(self._enquiries.rows.values())
            active_clients = len(self._clients.rows)

        total_revenue = sum(
            (inv.total for inv in invoices if inv.status == InvoiceStatus.PAID),
            Decimal("0"),
        )
        return Stats(
            total_revenue=float(total_revenue),
            pending_invoices=sum(1 for inv in invoices if inv.status in PENDING_STATUSES),
            active_clients=active_clients,
            open_enquiries=sum(1 for enq in enquiries if enq.status == EnquiryStatus.OPEN),
        )


def get_store(request: Request) -> MemStorage:
    """FastAPI dependency: the store owned by the running app."""
    return request.app.state.store
