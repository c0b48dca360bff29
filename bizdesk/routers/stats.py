"""
Dashboard statistics
"""

from fastapi import APIRouter, Depends

from ..auth import get_current_user
from ..models import Stats
from ..storage import MemStorage, get_store

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=Stats)
async def get_stats(store: MemStorage = Depends(get_store)):
    """Revenue, pending invoices, client and open enquiry counts"""
    return store.get_stats()
