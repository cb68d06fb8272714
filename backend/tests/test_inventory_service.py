import pytest

from roastery.errors import ConflictError, NotFoundError, ValidationError
from roastery.services import inventory_service


class TestLowStock:

    def test_strictly_below_threshold_lowest_first(self, db_session, make_product):
        make_product(name="Plenty", stock=50)
        make_product(name="At threshold", stock=5)
        make_product(name="Four", stock=4)
        make_product(name="Empty", stock=0)
        make_product(name="Two", stock=2)

        rows = inventory_service.get_low_stock_products()

        assert [r.product_name for r in rows] == ["Empty", "Two", "Four"]
        assert [r.quantity_in_stock for r in rows] == [0, 2, 4]

    def test_custom_threshold(self, db_session, make_product):
        make_product(name="Nine", stock=9)
        make_product(name="Ten", stock=10)
        rows = inventory_service.get_low_stock_products("10")
        assert [r.product_name for r in rows] == ["Nine"]

    def test_rows_carry_product_details(self, db_session, make_product):
        product = make_product(name="Decaf", price="11.50", stock=1, status="not available", product_type="ground")
        (row,) = inventory_service.get_low_stock_products(5)
        assert row.product_id == product.product_id
        assert str(row.unit_price) == "11.50"
        assert row.product_type == "ground"
        assert row.status == "not available"

    @pytest.mark.parametrize("threshold", ["-1", "abc", 2.5])
    def test_invalid_threshold(self, db_session, threshold):
        with pytest.raises(ValidationError, match="threshold"):
            inventory_service.get_low_stock_products(threshold)


class TestStockLevels:

    def test_details_join_newest_first(self, db_session, make_product):
        first = make_product(name="First", stock=3)
        second = make_product(name="Second", stock=8)
        make_product(name="No row", stock=None)

        rows = inventory_service.get_all_with_details()
        assert [r.product_id for r in rows] == [second.product_id, first.product_id]

    def test_create_record(self, db_session, make_product):
        product = make_product(stock=None)
        record = inventory_service.create_inventory_record(product.product_id, "12")
        assert record.quantity_in_stock == 12
        assert record.last_updated is not None

    def test_create_record_for_missing_product(self, db_session):
        with pytest.raises(NotFoundError):
            inventory_service.create_inventory_record(999, 1)

    def test_second_record_conflicts(self, db_session, make_product):
        product = make_product(stock=3)
        with pytest.raises(ConflictError):
            inventory_service.create_inventory_record(product.product_id, 1)

    def test_update_and_read_back(self, db_session, make_product):
        product = make_product(stock=3)
        updated = inventory_service.update_inventory(product.product_id, 0)
        assert updated.quantity_in_stock == 0
        assert inventory_service.get_inventory_by_product(product.product_id).quantity_in_stock == 0

    def test_update_missing_row_returns_none(self, db_session, make_product):
        product = make_product(stock=None)
        assert inventory_service.update_inventory(product.product_id, 4) is None

    @pytest.mark.parametrize("qty", [-1, "3.5", None, "x"])
    def test_quantity_must_be_non_negative_integer(self, db_session, make_product, qty):
        product = make_product(stock=3)
        with pytest.raises(ValidationError):
            inventory_service.update_inventory(product.product_id, qty)

    def test_set_stock_level_creates_then_updates(self, db_session, make_product):
        product = make_product(stock=None)
        created = inventory_service.set_stock_level(product.product_id, 6)
        updated = inventory_service.set_stock_level(product.product_id, 9)
        assert created.inventory_id == updated.inventory_id
        assert updated.quantity_in_stock == 9

    def test_delete(self, db_session, make_product):
        product = make_product(stock=3)
        assert inventory_service.delete_inventory(product.product_id) is True
        assert inventory_service.delete_inventory(product.product_id) is False
        assert inventory_service.get_inventory_by_product(product.product_id) is None

    def test_invalid_product_id(self, db_session):
        with pytest.raises(ValidationError, match="Invalid product ID"):
            inventory_service.get_inventory_by_product("zero")
