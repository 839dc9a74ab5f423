from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from common.enum import ACCOUNT_LABELS, TRANSACTION_TYPE_LABELS
from config import settings
from exceptions import NotFoundError, StorageError, ValidationError
from models import Transaction
from schemas import TransactionCreate
from utils.logger import get_logger

logger = get_logger(__name__)

MIN_ID, MAX_ID = -2 ** 63, 2 ** 63 - 1


def list_transactions(db: Session):
    try:
        return db.query(Transaction).order_by(Transaction.id).all()
    except SQLAlchemyError as exc:
        logger.exception("Database query error")
        raise StorageError("Database query failed", key="error") from exc


def validate_transaction(data: TransactionCreate, enforce_categories=None):
    """Presence check on all four fields, plus the optional category check."""
    missing = data.missing_fields()
    if missing:
        logger.info("Rejected transaction, missing %s", ", ".join(missing))
        raise ValidationError("All fields are required")

    if enforce_categories is None:
        enforce_categories = settings.ENFORCE_CATEGORIES
    if enforce_categories and (
        data.account not in ACCOUNT_LABELS or data.type not in TRANSACTION_TYPE_LABELS
    ):
        logger.info("Rejected transaction with account=%r type=%r", data.account, data.type)
        raise ValidationError("Invalid account or type")


def create_transaction(db: Session, data: TransactionCreate) -> dict:
    """Insert one row and return it with the id assigned by that insert.

    The returned ``amount`` is the submitted value, not the stored string.
    """
    validate_transaction(data)

    transaction = Transaction(
        account=data.account,
        type=data.type,
        amount=str(data.amount),
        date=data.date,
    )
    try:
        db.add(transaction)
        db.commit()
        db.refresh(transaction)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error inserting transaction")
        raise StorageError("Failed to add transaction") from exc

    logger.info("Added transaction %s", transaction.id)
    return {
        "id": transaction.id,
        "account": data.account,
        "type": data.type,
        "amount": data.amount,
        "date": data.date,
    }


def delete_transaction(db: Session, transaction_id) -> None:
    """Delete by id with a single statement; no matching row is a 404."""
    try:
        transaction_id = int(transaction_id)
    except (TypeError, ValueError):
        raise NotFoundError("Transaction not found")
    # Nothing outside a signed 64-bit integer can be a stored id
    if not MIN_ID <= transaction_id <= MAX_ID:
        raise NotFoundError("Transaction not found")

    try:
        deleted = db.query(Transaction).filter(
            Transaction.id == transaction_id
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting transaction %s", transaction_id)
        raise StorageError("Failed to delete transaction") from exc

    if deleted == 0:
        raise NotFoundError("Transaction not found")
    logger.info("Deleted transaction %s", transaction_id)
