"""
HTTP surface tests: JSON shapes and the status code for each error kind.
"""

from conftest import row_counts, stock_of


def _product_payload(**overrides):
    payload = {
        "product_name": "Colombia Huila",
        "description": "Caramel, red apple",
        "unit_price": "12.00",
        "product_type": "beans",
        "status": "available",
    }
    payload.update(overrides)
    return payload


class TestHealth:

    def test_health(self, client, db_session):
        res = client.get("/api/health")
        assert res.status_code == 200
        assert res.get_json()["checks"]["database"]["status"] == "healthy"


class TestProductRoutes:

    def test_create_with_stock_then_read(self, client, db_session):
        res = client.post("/api/products", json=_product_payload(quantity_in_stock=8))
        assert res.status_code == 201
        product = res.get_json()
        assert product["unit_price"] == 12.0

        res = client.get(f"/api/products/{product['product_id']}")
        assert res.status_code == 200
        assert res.get_json()["product_name"] == "Colombia Huila"

        inv = client.get(f"/api/inventory/{product['product_id']}").get_json()
        assert inv["quantity_in_stock"] == 8

    def test_validation_error_is_400(self, client, db_session):
        res = client.post("/api/products", json=_product_payload(unit_price="-3"))
        assert res.status_code == 400
        assert "unit_price" in res.get_json()["error"]

    def test_catalog_hides_unavailable(self, client, db_session):
        client.post("/api/products", json=_product_payload())
        client.post("/api/products", json=_product_payload(product_name="Old", status="not available"))

        body = client.get("/api/products/catalog").get_json()
        assert body["count"] == 1
        assert body["items"][0]["product_name"] == "Colombia Huila"
        assert client.get("/api/products").get_json()["count"] == 2

    def test_patch_and_delete(self, client, db_session):
        created = client.post("/api/products", json=_product_payload(quantity_in_stock=3)).get_json()
        url = f"/api/products/{created['product_id']}"

        res = client.patch(url, json={"status": "not available"})
        assert res.status_code == 200
        assert res.get_json()["status"] == "not available"

        assert client.delete(url).status_code == 200
        assert client.get(url).status_code == 404
        assert client.delete(url).status_code == 404
        assert client.get(f"/api/inventory/{created['product_id']}").status_code == 404

    def test_invalid_id_is_400(self, client, db_session):
        assert client.get("/api/products/abc").status_code == 400


class TestInventoryRoutes:

    def test_low_stock_and_details(self, client, db_session, make_product):
        make_product(name="Low", stock=1)
        make_product(name="High", stock=30)

        low = client.get("/api/inventory/low-stock").get_json()
        assert [r["product_name"] for r in low["items"]] == ["Low"]

        assert client.get("/api/inventory/low-stock?threshold=100").get_json()["count"] == 2
        assert client.get("/api/inventory/low-stock?threshold=-4").status_code == 400
        assert client.get("/api/inventory/details").get_json()["count"] == 2

    def test_put_sets_level(self, client, db_session, make_product):
        product = make_product(stock=None)
        res = client.put(f"/api/inventory/{product.product_id}", json={"quantity_in_stock": 14})
        assert res.status_code == 200
        assert res.get_json()["quantity_in_stock"] == 14

    def test_put_for_unknown_product_is_404(self, client, db_session):
        res = client.put("/api/inventory/999", json={"quantity_in_stock": 1})
        assert res.status_code == 404


class TestSaleRoutes:

    def test_checkout(self, client, db_session, customer, make_product):
        product = make_product(price="5.00", stock=10)

        res = client.post("/api/sales", json={
            "user_id": customer.user_id,
            "items": [{"product_id": product.product_id, "quantity": 3, "price_at_sale": "5.00"}],
            "discount_percentage": 10,
        })

        assert res.status_code == 201
        sale = res.get_json()["sale"]
        assert sale["subtotal"] == 15.0
        assert sale["discount_amount"] == 1.5
        assert sale["total_amount"] == 13.5
        assert stock_of(product.product_id) == 7

        detail = client.get(f"/api/sales/{sale['sale_id']}").get_json()
        assert detail["items"][0]["quantity"] == 3

    def test_insufficient_stock_is_400_with_details(self, client, db_session, customer, make_product):
        product = make_product(stock=2)

        res = client.post("/api/sales", json={
            "user_id": customer.user_id,
            "items": [{"product_id": product.product_id, "quantity": 5, "price_at_sale": "5.00"}],
        })

        assert res.status_code == 400
        body = res.get_json()
        assert body["error"] == f"Insufficient stock for product {product.product_id}. Available: 2, Requested: 5"
        assert body["details"] == {"product_id": product.product_id, "available": 2, "requested": 5}
        assert row_counts() == {"sales": 0, "sale_items": 0}

    def test_unknown_user_is_404(self, client, db_session, make_product):
        product = make_product(stock=2)
        res = client.post("/api/sales", json={
            "user_id": 999,
            "items": [{"product_id": product.product_id, "quantity": 1, "price_at_sale": "5.00"}],
        })
        assert res.status_code == 404

    def test_date_filter_needs_both_dates(self, client, db_session):
        assert client.get("/api/sales?start_date=01/01/2024").status_code == 400
        assert client.get("/api/sales?start_date=2024-01-01&end_date=2024-01-31").status_code == 400
        assert client.get("/api/sales?start_date=%20&end_date=31/01/2024").status_code == 400
        assert client.get("/api/sales?start_date=01/01/2024&end_date=31/01/2024").status_code == 200

    def test_discount_stats_and_delete(self, client, db_session, customer, make_product):
        product = make_product(stock=10)
        sale = client.post("/api/sales", json={
            "user_id": customer.user_id,
            "items": [{"product_id": product.product_id, "quantity": 2, "price_at_sale": "10.00"}],
        }).get_json()["sale"]

        res = client.post(f"/api/sales/{sale['sale_id']}/discount", json={"discount_percentage": 25})
        assert res.status_code == 200
        assert res.get_json()["sale"]["total_amount"] == 15.0

        assert client.post(f"/api/sales/{sale['sale_id']}/discount", json={"discount_percentage": 120}).status_code == 400
        assert client.post("/api/sales/999/discount", json={"discount_percentage": 5}).status_code == 404

        stats = client.get("/api/sales/stats").get_json()
        assert stats == {"total_amount": 15.0, "count": 1}

        mine = client.get(f"/api/sales?user_id={customer.user_id}").get_json()
        assert mine["count"] == 1

        assert client.delete(f"/api/sales/{sale['sale_id']}").status_code == 200
        assert client.get(f"/api/sales/{sale['sale_id']}").status_code == 404


class TestUserAndDashboardRoutes:

    def test_register_conflict_is_409(self, client, db_session):
        payload = {"first_name": "Sam", "last_name": "Ito", "email": "sam@example.com", "password": "longenough"}
        res = client.post("/api/users", json=payload)
        assert res.status_code == 201
        assert "password" not in res.get_json()

        assert client.post("/api/users", json=payload).status_code == 409
        assert client.get(f"/api/users/{res.get_json()['user_id']}").status_code == 200
        assert client.get("/api/users/4242").status_code == 404

    def test_dashboards(self, client, db_session, customer, make_product):
        product = make_product(stock=3)
        client.post("/api/sales", json={
            "user_id": customer.user_id,
            "items": [{"product_id": product.product_id, "quantity": 1, "price_at_sale": "4.50"}],
        })

        admin = client.get("/api/dashboard/admin").get_json()
        assert admin["stats"]["total_revenue"] == 4.5
        assert admin["stats"]["low_stock_count"] == 1
        assert len(admin["recent_sales"]) == 1

        mine = client.get(f"/api/dashboard/customer/{customer.user_id}").get_json()
        assert mine["total_orders"] == 1
        assert mine["total_spent"] == 4.5
