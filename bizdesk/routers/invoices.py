"""
Invoices API Endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..auth import get_current_user
from ..models import Invoice, InvoiceCreate, InvoicePatch, InvoiceStatus
from ..storage import MemStorage, get_store

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[Invoice])
async def list_invoices(
    client_id: Optional[int] = Query(default=None, alias="clientId"),
    invoice_status: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    store: MemStorage = Depends(get_store),
):
    """List invoices, newest first, optionally for one client or status"""
    if client_id is not None:
        invoices = store.get_invoices_by_client(client_id)
    else:
        invoices = store.get_invoices()

    if invoice_status:
        invoices = [inv for inv in invoices if inv.status == invoice_status]
    return invoices


@router.post("", response_model=Invoice, status_code=status.HTTP_201_CREATED)
async def create_invoice(invoice_data: InvoiceCreate, store: MemStorage = Depends(get_store)):
    """Create a new invoice; the invoice number is assigned here"""
    # clientId is a soft reference and is not checked against the clients table
    return store.create_invoice(invoice_data)


@router.get("/{invoice_id}", response_model=Invoice)
async def get_invoice(invoice_id: int, store: MemStorage = Depends(get_store)):
    """Get a specific invoice"""
    invoice = store.get_invoice(invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.put("/{invoice_id}", response_model=Invoice)
async def update_invoice(invoice_id: int, update: InvoicePatch, store: MemStorage = Depends(get_store)):
    """Update invoice (status, items, amounts, etc.)"""
    invoice = store.update_invoice(invoice_id, update)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(invoice_id: int, store: MemStorage = Depends(get_store)):
    """Delete an invoice regardless of its status"""
    if not store.delete_invoice(invoice_id):
        raise HTTPException(status_code=404, detail="Invoice not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
