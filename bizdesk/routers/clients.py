"""
Clients API Endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..auth import get_current_user
from ..models import Client, ClientCreate, ClientPatch
from ..storage import MemStorage, get_store

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[Client])
async def list_clients(store: MemStorage = Depends(get_store)):
    """List all clients, newest first"""
    return store.get_clients()


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def create_client(client_data: ClientCreate, store: MemStorage = Depends(get_store)):
    """Create a new client"""
    return store.create_client(client_data)


@router.get("/{client_id}", response_model=Client)
async def get_client(client_id: int, store: MemStorage = Depends(get_store)):
    """Get a specific client"""
    client = store.get_client(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put("/{client_id}", response_model=Client)
async def update_client(client_id: int, update: ClientPatch, store: MemStorage = Depends(get_store)):
    """Update the supplied client fields"""
    client = store.update_client(client_id, update)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: int, store: MemStorage = Depends(get_store)):
    """Delete a client. Invoices that reference it are left alone."""
    if not store.delete_client(client_id):
        raise HTTPException(status_code=404, detail="Client not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
