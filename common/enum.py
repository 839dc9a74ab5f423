import enum


class AccountEnum(str, enum.Enum):
    BANK = "Bank Account"
    MOBILE_MONEY = "Mobile Money Account"
    CASH = "Cash"


class TransactionTypeEnum(str, enum.Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


ACCOUNT_LABELS = [a.value for a in AccountEnum]
TRANSACTION_TYPE_LABELS = [t.value for t in TransactionTypeEnum]
