import unittest

from dashboard.store import (
    BudgetChanged, DashboardState, DateRangeChanged, FormChanged, FormCleared,
    NoticeRaised, Store, TransactionAdded, TransactionRemoved, TransactionsLoaded,
    parse_budget, reduce,
)
from schemas import TransactionResponse


def tx(id, type="Expense", amount="10", date="2024-01-15", account="Cash"):
    return TransactionResponse(id=id, account=account, type=type, amount=amount, date=date)


class ParseBudgetTestCase(unittest.TestCase):
    def test_parse_budget(self):
        self.assertEqual(parse_budget("250"), 250.0)
        self.assertEqual(parse_budget(" 99.5 "), 99.5)
        self.assertEqual(parse_budget(0), 0.0)
        self.assertEqual(parse_budget("0"), 0.0)
        self.assertIsNone(parse_budget(""))
        self.assertIsNone(parse_budget(None))
        self.assertIsNone(parse_budget("a lot"))


class ReduceTestCase(unittest.TestCase):
    def setUp(self):
        self.state = reduce(DashboardState(), TransactionsLoaded(transactions=[
            tx(1, amount="40", date="2024-01-05"),
            tx(2, amount="80", date="2024-02-05"),
            tx(3, type="Income", amount="500", date="2024-01-20"),
        ]))

    def test_load_sets_canonical_and_filtered(self):
        self.assertEqual(len(self.state.transactions), 3)
        self.assertEqual(len(self.state.view.filtered), 3)
        self.assertEqual(self.state.view.total_expenses, 120.0)

    def test_reduce_does_not_mutate_previous_state(self):
        before = self.state
        after = reduce(before, TransactionRemoved(transaction_id=1))
        self.assertEqual(len(before.transactions), 3)
        self.assertEqual(len(after.transactions), 2)

    def test_date_range_rederives(self):
        state = reduce(self.state, DateRangeChanged(start="2024-01-01", end="2024-01-31"))
        self.assertEqual([t.id for t in state.view.filtered], [1, 3])
        self.assertEqual(state.view.total_expenses, 40.0)
        self.assertEqual(len(state.transactions), 3)

        cleared = reduce(state, DateRangeChanged(start="2024-01-01", end=""))
        self.assertEqual(cleared.date_range, ("2024-01-01", None))
        self.assertEqual(len(cleared.view.filtered), 3)

    def test_budget_and_expenses_stay_consistent(self):
        state = reduce(self.state, BudgetChanged(value="100"))
        self.assertTrue(state.view.budget_exceeded)

        state = reduce(state, DateRangeChanged(start="2024-01-01", end="2024-01-31"))
        self.assertFalse(state.view.budget_exceeded)

        state = reduce(state, TransactionAdded(transaction=tx(4, amount="60", date="2024-01-25")))
        self.assertEqual(state.view.total_expenses, 100.0)
        self.assertFalse(state.view.budget_exceeded)

        state = reduce(state, BudgetChanged(value="99.99"))
        self.assertTrue(state.view.budget_exceeded)

        state = reduce(state, BudgetChanged(value=""))
        self.assertIsNone(state.budget)
        self.assertFalse(state.view.budget_exceeded)

    def test_add_appends_and_remove_by_id(self):
        state = reduce(self.state, TransactionAdded(transaction=tx(9)))
        self.assertEqual([t.id for t in state.transactions], [1, 2, 3, 9])
        state = reduce(state, TransactionRemoved(transaction_id=2))
        self.assertEqual([t.id for t in state.transactions], [1, 3, 9])
        state = reduce(state, TransactionRemoved(transaction_id=42))
        self.assertEqual([t.id for t in state.transactions], [1, 3, 9])

    def test_form_changes_and_clears(self):
        state = reduce(self.state, FormChanged(fields={"account": "Cash", "amount": "5"}))
        self.assertEqual(state.form.account, "Cash")
        self.assertEqual(state.form.missing_fields(), ["type", "date"])
        state = reduce(state, FormCleared())
        self.assertIsNone(state.form.account)

    def test_unknown_action_raises(self):
        with self.assertRaises(TypeError):
            reduce(self.state, object())


class StoreTestCase(unittest.TestCase):
    def test_dispatch_notifies_subscribers(self):
        store = Store()
        seen = []
        unsubscribe = store.subscribe(seen.append)

        store.dispatch(NoticeRaised(message="hello"))
        self.assertEqual(store.state.notice, "hello")
        self.assertEqual(len(seen), 1)

        unsubscribe()
        store.dispatch(NoticeRaised(message="again"))
        self.assertEqual(len(seen), 1)

    def test_unsubscribe_twice_is_harmless(self):
        store = Store()
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        store.dispatch(NoticeRaised(message="hello"))
        self.assertEqual(seen, [])


if __name__ == "__main__":
    unittest.main()
