"""
Enquiries API Endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..auth import get_current_user
from ..models import Enquiry, EnquiryCreate, EnquiryPatch, EnquiryPriority, EnquiryStatus
from ..storage import MemStorage, get_store

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[Enquiry])
async def list_enquiries(
    enquiry_status: Optional[EnquiryStatus] = Query(default=None, alias="status"),
    priority: Optional[EnquiryPriority] = None,
    store: MemStorage = Depends(get_store),
):
    """List enquiries with optional filters"""
    enquiries = store.get_enquiries()

    if enquiry_status:
        enquiries = [e for e in enquiries if e.status == enquiry_status]
    if priority:
        enquiries = [e for e in enquiries if e.priority == priority]
    return enquiries


@router.post("", response_model=Enquiry, status_code=status.HTTP_201_CREATED)
async def create_enquiry(enquiry_data: EnquiryCreate, store: MemStorage = Depends(get_store)):
    """Record a new enquiry (status defaults to open, priority to medium)"""
    return store.create_enquiry(enquiry_data)


@router.get("/{enquiry_id}", response_model=Enquiry)
async def get_enquiry(enquiry_id: int, store: MemStorage = Depends(get_store)):
    enquiry = store.get_enquiry(enquiry_id)
    if not enquiry:
        raise HTTPException(status_code=404, detail="Enquiry not found")
    return enquiry


@router.put("/{enquiry_id}", response_model=Enquiry)
async def update_enquiry(enquiry_id: int, update: EnquiryPatch, store: MemStorage = Depends(get_store)):
    enquiry = store.update_enquiry(enquiry_id, update)
    if not enquiry:
        raise HTTPException(status_code=404, detail="Enquiry not found")
    return enquiry


@router.delete("/{enquiry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_enquiry(enquiry_id: int, store: MemStorage = Depends(get_store)):
    if not store.delete_enquiry(enquiry_id):
        raise HTTPException(status_code=404, detail="Enquiry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
