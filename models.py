from sqlalchemy import Column, Integer, String

from database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    account = Column(String, nullable=False)
    type = Column(String, nullable=False)
    # Kept as submitted; the dashboard parses it as a float
    amount = Column(String, nullable=False)
    # YYYY-MM-DD, not normalized
    date = Column(String, nullable=False)
