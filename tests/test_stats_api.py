"""Dashboard statistics and audit log listing."""
import calendar
from datetime import date

from conftest import create_product
from routes.stats import _last_months, predict_revenue
from schemas.reports import MonthlySales


def test_last_months_wraps_the_year():
    assert _last_months(date(2024, 2, 10), 4) == [(2023, 11), (2023, 12), (2024, 1), (2024, 2)]


def test_prediction_grows_from_last_month():
    history = [MonthlySales(month="Jan", sales_count=1, revenue=50.0),
               MonthlySales(month="Feb", sales_count=2, revenue=100.0)]
    prediction = predict_revenue(history, date(2024, 11, 1))

    assert [p.month for p in prediction[:3]] == ["Dec", "Jan", "Feb"]
    assert [p.predicted_revenue for p in prediction[:2]] == [105.0, 110.0]


class TestStatsEndpoints:
    def test_summary(self, client, auth_headers):
        hammer = create_product(client, auth_headers, name="Hammer", price=10.0, stock=30)
        create_product(client, auth_headers, name="Nails", price=1.0, stock=5)
        create_product(client, auth_headers, name="Glue", price=2.0, stock=0)
        client.post("/sales", json={"customer": "Ann", "items": [{"product_id": hammer["id"], "quantity": 2}]},
                    headers=auth_headers)

        summary = client.get("/stats/summary", headers=auth_headers).json()
        assert summary["total_products"] == 3
        assert summary["total_stock"] == 33
        assert summary["low_stock_products"] == 1
        assert summary["out_of_stock_products"] == 1
        assert summary["inventory_value"] == 285.0
        assert summary["total_revenue"] == 20.0
        assert summary["total_sales"] == 1
        assert summary["customers"] == 1

    def test_monthly_and_top_products(self, client, auth_headers):
        pen = create_product(client, auth_headers, name="Pen", price=1.0, stock=50)
        pad = create_product(client, auth_headers, name="Pad", price=2.0, stock=50)
        client.post("/sales", json={"items": [{"product_id": pen["id"], "quantity": 5},
                                              {"product_id": pad["id"], "quantity": 1}]}, headers=auth_headers)

        monthly = client.get("/stats/monthly", headers=auth_headers).json()
        assert len(monthly["data"]) == 6
        assert len(monthly["prediction"]) == 6
        current = monthly["data"][-1]
        assert current["month"] in calendar.month_abbr[1:]
        assert current["sales_count"] == 6
        assert current["revenue"] == 7.0

        top = client.get("/stats/top-products", params={"limit": 1}, headers=auth_headers).json()["data"]
        assert top == [{"product_id": pen["id"], "product_name": "Pen", "total_quantity_sold": 5}]


def test_logs_are_filtered_by_action(client, auth_headers):
    create_product(client, auth_headers)

    logs = client.get("/logs", params={"action": "PRODUCT_CREATE"}, headers=auth_headers).json()
    assert logs["total"] == 1
    assert logs["items"][0]["status"] == "SUCCESS"
    assert logs["items"][0]["resource"] == "products"
