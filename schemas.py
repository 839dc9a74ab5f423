from pydantic import BaseModel
from typing import Optional, List, Union


# Amounts travel as entered: "100", 100 or 12.5
Amount = Union[str, int, float]


# Transaction Schemas
class TransactionCreate(BaseModel):
    # Presence is checked by the service so a missing field maps to a 400
    account: Optional[str] = None
    type: Optional[str] = None
    amount: Optional[Amount] = None
    date: Optional[str] = None

    def missing_fields(self) -> List[str]:
        return [name for name in ("account", "type", "amount", "date") if not getattr(self, name)]


class TransactionResponse(BaseModel):
    id: int
    account: str
    type: str
    amount: Amount
    date: str

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    transactions: List[TransactionResponse]


class TransactionCreatedResponse(BaseModel):
    message: str
    transaction: TransactionResponse


class MessageResponse(BaseModel):
    message: str
