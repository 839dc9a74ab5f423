from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from schemas import (
    TransactionCreate, TransactionListResponse,
    TransactionCreatedResponse, MessageResponse,
)
import services

router = APIRouter()


@router.get("", response_model=TransactionListResponse)
async def list_transactions(db: Session = Depends(get_db)):
    """List every stored transaction"""
    return {"transactions": services.list_transactions(db)}


@router.post("", response_model=TransactionCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
        transaction_data: TransactionCreate,
        db: Session = Depends(get_db)
):
    """Create a new transaction"""
    transaction = services.create_transaction(db, transaction_data)
    return {
        "message": "Transaction added successfully!",
        "transaction": transaction,
    }


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
        transaction_id: str,
        db: Session = Depends(get_db)
):
    """Delete a transaction"""
    services.delete_transaction(db, transaction_id)
    return {"message": "Transaction deleted successfully!"}
