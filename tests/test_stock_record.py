"""Tests for the StockRecord entity."""

import threading
from uuid import uuid4

import pytest

from market.domain import NIL_ID, StockRecord
from market.errors import InvalidArgument


class TestStockRecordCreate:
    """Tests for StockRecord construction."""

    def test_create(self) -> None:
        owner = uuid4()
        record = StockRecord.create(owner, "GOLD_BULLION", 500)
        assert record.owner_id == owner
        assert record.asset_symbol == "GOLD_BULLION"
        assert record.quantity == 500
        assert record.id != NIL_ID

    def test_each_record_gets_its_own_id(self) -> None:
        owner = uuid4()
        first = StockRecord.create(owner, "GRAIN", 1)
        second = StockRecord.create(owner, "GRAIN", 1)
        assert first.id != second.id

    def test_symbol_is_case_sensitive(self) -> None:
        owner = uuid4()
        assert StockRecord.create(owner, "gold", 1).asset_symbol == "gold"

    @pytest.mark.parametrize("owner", [None, NIL_ID])
    def test_create_rejects_missing_owner(self, owner: object) -> None:
        with pytest.raises(InvalidArgument):
            StockRecord.create(owner, "GRAIN", 10)

    @pytest.mark.parametrize("symbol", ["", "   ", None])
    def test_create_rejects_empty_symbol(self, symbol: object) -> None:
        with pytest.raises(InvalidArgument, match="symbol"):
            StockRecord.create(uuid4(), symbol, 10)

    def test_create_rejects_negative_quantity(self) -> None:
        with pytest.raises(InvalidArgument, match="negative"):
            StockRecord.create(uuid4(), "GRAIN", -1)

    @pytest.mark.parametrize("quantity", [1.5, "10", True])
    def test_create_rejects_non_integer_quantity(self, quantity: object) -> None:
        with pytest.raises(InvalidArgument, match="integer"):
            StockRecord.create(uuid4(), "GRAIN", quantity)


class TestStockRecordMutations:
    """Tests for add_stock / remove_stock."""

    def test_add_stock(self) -> None:
        record = StockRecord.create(uuid4(), "SILICON", 100)
        assert record.add_stock(50) == 150
        assert record.quantity == 150

    @pytest.mark.parametrize("amount", [0, -5])
    def test_add_stock_non_positive_raises_without_mutation(self, amount: int) -> None:
        record = StockRecord.create(uuid4(), "SILICON", 100)
        with pytest.raises(InvalidArgument, match="positive"):
            record.add_stock(amount)
        assert record.quantity == 100

    def test_remove_stock_within_quantity(self) -> None:
        record = StockRecord.create(uuid4(), "SILICON", 100)
        assert record.remove_stock(40) is True
        assert record.quantity == 60

    def test_remove_all_stock(self) -> None:
        record = StockRecord.create(uuid4(), "SILICON", 100)
        assert record.remove_stock(100) is True
        assert record.quantity == 0

    def test_remove_stock_insufficient_declines(self) -> None:
        record = StockRecord.create(uuid4(), "SILICON", 100)
        assert record.remove_stock(101) is False
        assert record.quantity == 100

    @pytest.mark.parametrize("amount", [0, -1])
    def test_remove_stock_non_positive_raises(self, amount: int) -> None:
        record = StockRecord.create(uuid4(), "SILICON", 100)
        with pytest.raises(InvalidArgument):
            record.remove_stock(amount)
        assert record.quantity == 100

    def test_concurrent_removals_never_oversell(self) -> None:
        """Test racing removals cannot both pass the quantity check."""
        record = StockRecord.create(uuid4(), "GOLD", 50)
        results: list[bool] = []
        results_lock = threading.Lock()
        start = threading.Barrier(20)

        def worker() -> None:
            start.wait()
            outcome = record.remove_stock(5)
            with results_lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 10
        assert results.count(False) == 10
        assert record.quantity == 0
