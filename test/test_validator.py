# Test type: unit
# Validation: strict transaction validation (customer, date, price, duplicates)
# Command: pytest test/test_validator.py -v

from app.utils.validator import (
    MSG_CUSTOMER,
    MSG_DATE,
    MSG_DUPLICATE,
    MSG_NEGATIVE,
    MSG_NOT_OBJECT,
    MSG_PRICE,
    validate,
)


def _txn(txn_id=1, customer_id="C1", purchase_date="2024-01-10", price=120.0):
    return {
        "transactionId": txn_id,
        "customerId": customer_id,
        "customerName": "John",
        "purchaseDate": purchase_date,
        "productPurchased": "Laptop",
        "price": price,
    }


class TestValidateRules:
    def test_all_valid(self):
        valid, invalid = validate([_txn(1), _txn(2, price=45.5)])
        assert len(valid) == 2
        assert invalid == []

    def test_not_an_object(self):
        valid, invalid = validate(["oops"])
        assert valid == []
        assert invalid == [("oops", MSG_NOT_OBJECT)]

    def test_missing_customer(self):
        _, invalid = validate([_txn(customer_id=None), _txn(2, customer_id="")])
        assert [msg for _, msg in invalid] == [MSG_CUSTOMER, MSG_CUSTOMER]

    def test_bad_date(self):
        _, invalid = validate([_txn(purchase_date="31/01/2024")])
        assert invalid[0][1] == MSG_DATE

    def test_non_numeric_price(self):
        _, invalid = validate([_txn(price="ten dollars")])
        assert invalid[0][1] == MSG_PRICE

    def test_negative_price(self):
        _, invalid = validate([_txn(price=-10)])
        assert invalid[0][1] == MSG_NEGATIVE

    def test_missing_price_is_allowed(self):
        txn = _txn()
        del txn["price"]
        valid, invalid = validate([txn])
        assert len(valid) == 1
        assert invalid == []

    def test_duplicate_transaction_id(self):
        valid, invalid = validate([_txn(7), _txn(7, price=60)])
        assert len(valid) == 1
        assert invalid[0][1] == MSG_DUPLICATE
        assert invalid[0][0]["price"] == 60

    def test_missing_id_never_duplicate(self):
        valid, _ = validate([_txn(None), _txn(None)])
        assert len(valid) == 2


class TestValidateRuleOrder:
    def test_customer_checked_before_date(self):
        _, invalid = validate([_txn(customer_id=None, purchase_date="bad")])
        assert invalid[0][1] == MSG_CUSTOMER

    def test_date_checked_before_price(self):
        _, invalid = validate([_txn(purchase_date="bad", price=-5)])
        assert invalid[0][1] == MSG_DATE

    def test_invalid_record_does_not_claim_id(self):
        """A rejected record must not make a later one with the same id a duplicate."""
        valid, invalid = validate([_txn(3, price=-1), _txn(3)])
        assert len(valid) == 1
        assert invalid[0][1] == MSG_NEGATIVE

    def test_valid_records_are_copies(self):
        txn = _txn()
        valid, _ = validate([txn])
        assert valid[0] == txn
        assert valid[0] is not txn

    def test_empty(self):
        assert validate([]) == ([], [])
