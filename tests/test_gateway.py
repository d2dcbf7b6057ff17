import asyncio
import uuid
from datetime import timedelta

import pytest

from inventory_gateway.core.exceptions import BackendOperationFailed, RowMappingError
from inventory_gateway.models import ExpenseByCategory, PurchaseSummary, SalesSummary, User
from inventory_gateway.schemas.views import NewProduct
from inventory_gateway.services import gateway as gateway_module
from inventory_gateway.services.gateway import DataGateway

from tests.conftest import SEED_DAY


# ========================================
# fetch_products
# ========================================

@pytest.mark.asyncio
async def test_fetch_products_without_search_returns_all(seeded_gateway):
    products = await seeded_gateway.fetch_products()

    assert len(products) == 8
    assert {p.name for p in products} >= {"Laptop", "USB Cable", "Desk Lamp"}


@pytest.mark.asyncio
async def test_fetch_products_empty_search_returns_all(seeded_gateway):
    assert len(await seeded_gateway.fetch_products("")) == 8


@pytest.mark.asyncio
async def test_fetch_products_search_is_case_insensitive_substring(seeded_gateway):
    lamps = await seeded_gateway.fetch_products("LAMP")
    assert [p.name for p in lamps] == ["Desk Lamp"]

    mo = await seeded_gateway.fetch_products("mo")
    assert sorted(p.name for p in mo) == ["Monitor", "Wireless Mouse"]

    for search in ("e", "Cable", "zzz"):
        matches = await seeded_gateway.fetch_products(search)
        assert all(search.lower() in p.name.lower() for p in matches)


@pytest.mark.asyncio
async def test_fetch_products_search_wildcards_match_literally(seeded_gateway):
    assert await seeded_gateway.fetch_products("%") == []
    assert await seeded_gateway.fetch_products("_") == []


@pytest.mark.asyncio
async def test_fetch_products_search_folds_non_ascii_case(gateway):
    await gateway.create_product(NewProduct(name="Café Crème", price=4, stock_quantity=12))
    await gateway.create_product(NewProduct(name="Cafe Filter", price=2, stock_quantity=30))

    assert [p.name for p in await gateway.fetch_products("CAFÉ")] == ["Café Crème"]
    assert [p.name for p in await gateway.fetch_products("crÈme")] == ["Café Crème"]


# ========================================
# fetch_dashboard_metrics
# ========================================

@pytest.mark.asyncio
async def test_dashboard_returns_top_five_products_by_stock(seeded_gateway):
    metrics = await seeded_gateway.fetch_dashboard_metrics()

    # Seed stocks: 500, 200, 150, 120, 100, 80, 75, 50
    assert [p.stock_quantity for p in metrics.popular_products] == [500, 200, 150, 120, 100]
    assert metrics.popular_products[0].name == "USB Cable"


@pytest.mark.asyncio
async def test_dashboard_summaries_are_oldest_first(seeded_gateway):
    metrics = await seeded_gateway.fetch_dashboard_metrics()

    for rows in (metrics.sales_summary, metrics.purchase_summary, metrics.expense_summary):
        dates = [row.date for row in rows]
        assert len(dates) == 7
        assert dates == sorted(dates)
        assert dates[0] == SEED_DAY - timedelta(days=6)
        assert dates[-1] == SEED_DAY

    assert metrics.sales_summary[-1].total_value == 19000
    assert metrics.purchase_summary[0].change_percentage == 15.0
    assert [e.total_expenses for e in metrics.expense_summary][:2] == [3500, 3800]


@pytest.mark.asyncio
async def test_dashboard_expense_categories_largest_first(seeded_gateway):
    metrics = await seeded_gateway.fetch_dashboard_metrics()

    assert [e.amount for e in metrics.expense_by_category_summary] == [
        "2500", "800", "500", "400", "300"
    ]


@pytest.mark.asyncio
async def test_dashboard_respects_configured_product_limit(session_factory, seeded_gateway):
    gateway = DataGateway(session_factory, popular_products_limit=2)

    metrics = await gateway.fetch_dashboard_metrics()

    assert [p.stock_quantity for p in metrics.popular_products] == [500, 200]


@pytest.mark.asyncio
async def test_dashboard_on_empty_store_returns_empty_lists(gateway):
    metrics = await gateway.fetch_dashboard_metrics()

    assert metrics.popular_products == []
    assert metrics.expense_by_category_summary == []


@pytest.mark.asyncio
async def test_dashboard_fails_as_a_whole_when_one_read_fails(engine, seeded_gateway):
    async with engine.begin() as conn:
        await conn.run_sync(PurchaseSummary.__table__.drop)

    with pytest.raises(BackendOperationFailed) as excinfo:
        await seeded_gateway.fetch_dashboard_metrics()

    assert excinfo.value.status == 500
    assert "purchase_summary" in excinfo.value.message


@pytest.mark.asyncio
async def test_dashboard_fails_when_a_row_cannot_be_mapped(seeded_gateway, monkeypatch):
    def broken_mapper(row):
        raise RowMappingError("sales_summary", "total_value")

    monkeypatch.setattr(gateway_module, "map_sales_summary", broken_mapper)

    with pytest.raises(BackendOperationFailed) as excinfo:
        await seeded_gateway.fetch_dashboard_metrics()

    assert "total_value" in excinfo.value.message


@pytest.mark.asyncio
async def test_dashboard_first_failure_cancels_pending_reads(gateway, monkeypatch):
    never = asyncio.Event()
    cancelled = []

    async def fetch_all(stmt, mapper):
        if mapper is gateway_module.map_purchase_summary:
            raise RuntimeError("purchase_summary unavailable")
        try:
            await never.wait()
        except asyncio.CancelledError:
            cancelled.append(mapper.__name__)
            raise

    monkeypatch.setattr(gateway, "_fetch_all", fetch_all)

    with pytest.raises(BackendOperationFailed) as excinfo:
        await asyncio.wait_for(gateway.fetch_dashboard_metrics(), timeout=5)

    assert excinfo.value.message == "purchase_summary unavailable"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert {"map_product", "map_sales_summary"} <= set(cancelled)
    assert not never.is_set()


@pytest.mark.asyncio
async def test_explicit_gateway_options_are_not_replaced_by_defaults(session_factory):
    gateway = DataGateway(session_factory, popular_products_limit=1, error_status=503)

    assert gateway.popular_products_limit == 1
    assert gateway.error_status == 503


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -3])
async def test_product_limit_below_one_is_rejected(session_factory, limit):
    with pytest.raises(ValueError, match="popular_products_limit"):
        DataGateway(session_factory, popular_products_limit=limit)


# ========================================
# create_product
# ========================================

@pytest.mark.asyncio
async def test_create_product_returns_generated_id_and_is_listed(gateway):
    created = await gateway.create_product(
        NewProduct(name="Pen", price=1.5, stock_quantity=10)
    )

    assert isinstance(created.product_id, uuid.UUID)
    assert created.name == "Pen"
    assert created.price == 1.5
    assert created.rating is None
    assert created.stock_quantity == 10

    products = await gateway.fetch_products()
    assert created in products


@pytest.mark.asyncio
async def test_create_product_accepts_camel_case_input(gateway):
    new_product = NewProduct.model_validate(
        {"name": "Stapler", "price": 12, "rating": 4.4, "stockQuantity": 3}
    )

    created = await gateway.create_product(new_product)

    assert created.model_dump(by_alias=True)["stockQuantity"] == 3
    assert created.rating == 4.4


@pytest.mark.asyncio
async def test_create_product_with_negative_price_fails_and_persists_nothing(gateway):
    with pytest.raises(BackendOperationFailed) as excinfo:
        await gateway.create_product(NewProduct(name="Bad", price=-1, stock_quantity=0))

    assert excinfo.value.status == 500
    assert "CHECK constraint failed" in excinfo.value.message
    assert await gateway.fetch_products("Bad") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("field, value", [("rating", 5.5), ("stock_quantity", -1)])
async def test_create_product_rejected_by_other_constraints(gateway, field, value):
    payload = {"name": "Odd", "price": 1, "stock_quantity": 1, field: value}

    with pytest.raises(BackendOperationFailed):
        await gateway.create_product(NewProduct(**payload))

    assert await gateway.fetch_products() == []


# ========================================
# fetch_users / fetch_expenses_by_category
# ========================================

@pytest.mark.asyncio
async def test_fetch_users_returns_everyone(seeded_gateway):
    users = await seeded_gateway.fetch_users()

    assert len(users) == 5
    assert "jane.smith@example.com" in {u.email for u in users}


@pytest.mark.asyncio
async def test_fetch_expenses_by_category_sorted_with_text_amounts(session_factory, gateway):
    async with session_factory() as db:
        db.add_all([
            ExpenseByCategory(category="Rent", amount=1200.75, date=SEED_DAY),
            ExpenseByCategory(category="Snacks", amount=35, date=SEED_DAY),
            ExpenseByCategory(category="Travel", amount=2100, date=SEED_DAY),
        ])
        await db.commit()

    rows = await gateway.fetch_expenses_by_category()

    assert [r.category for r in rows] == ["Travel", "Rent", "Snacks"]
    assert [r.amount for r in rows] == ["2100", "1200.75", "35"]
    assert all(isinstance(r.amount, str) for r in rows)


# ========================================
# Round trip & errors
# ========================================

@pytest.mark.asyncio
async def test_seeded_snake_case_values_come_back_in_camel_case(session_factory, gateway):
    row = SalesSummary(total_value=321.5, change_percentage=-2.25, date=SEED_DAY)
    user = User(name="Dana Lee", email="dana@example.com")
    async with session_factory() as db:
        db.add_all([row, user])
        await db.commit()

    metrics = await gateway.fetch_dashboard_metrics()
    dumped = metrics.model_dump(by_alias=True)["salesSummary"][0]

    assert dumped == {
        "salesSummaryId": row.sales_summary_id,
        "totalValue": 321.5,
        "changePercentage": -2.25,
        "date": SEED_DAY,
    }

    users = [u.model_dump(by_alias=True) for u in await gateway.fetch_users()]
    assert users == [{"userId": user.user_id, "name": "Dana Lee", "email": "dana@example.com"}]


@pytest.mark.asyncio
async def test_failures_use_configured_status(engine, session_factory):
    gateway = DataGateway(session_factory, error_status=503)
    async with engine.begin() as conn:
        await conn.run_sync(User.__table__.drop)

    with pytest.raises(BackendOperationFailed) as excinfo:
        await gateway.fetch_users()

    assert excinfo.value.to_envelope() == {
        "status": 503,
        "message": "no such table: users",
    }
