"""
Data Gateway
============

The five dashboard handlers. Each one is a single stateless round trip:
build a statement, await the backend, map the rows, return.

Handlers never retry, paginate or validate business rules; storage
constraints are the only validation. Any failure is re-wrapped into
BackendOperationFailed carrying the backend's own message.
"""

import asyncio
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from sqlalchemy import Select, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inventory_gateway.config import settings
from inventory_gateway.core.exceptions import BackendOperationFailed
from inventory_gateway.core.logging import get_logger, setup_logging
from inventory_gateway.database import SessionLocal
from inventory_gateway.models import (
    ExpenseByCategory,
    ExpenseSummary,
    Product,
    PurchaseSummary,
    SalesSummary,
    User,
)
from inventory_gateway.schemas import views
from inventory_gateway.schemas.mappers import (
    map_expense_by_category,
    map_expense_summary,
    map_product,
    map_purchase_summary,
    map_sales_summary,
    map_user,
)

logger = get_logger(__name__)

T = TypeVar("T")

# Core tables: selecting them yields rows keyed by column name
products = Product.__table__
users = User.__table__
sales_summary = SalesSummary.__table__
purchase_summary = PurchaseSummary.__table__
expense_summary = ExpenseSummary.__table__
expense_by_category = ExpenseByCategory.__table__


class DataGateway:
    """
    Typed read/write handlers over the inventory tables.

    The gateway holds no state between calls besides the session factory.
    Every round trip opens its own session, so handlers (and the five
    dashboard reads) can run concurrently.

    Example:
        gateway = DataGateway()
        metrics = await gateway.fetch_dashboard_metrics()
        print(metrics.model_dump(by_alias=True))
    """

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        popular_products_limit: Optional[int] = None,
        error_status: Optional[int] = None
    ):
        """
        Initialize the gateway.

        Args:
            session_factory: Async session factory (defaults to the global one)
            popular_products_limit: Products on the dashboard (default from settings)
            error_status: Status reported on failure (default from settings)

        Raises:
            ValueError: If popular_products_limit is below 1
        """
        if popular_products_limit is None:
            popular_products_limit = settings.popular_products_limit
        if popular_products_limit < 1:
            raise ValueError(
                f"popular_products_limit must be at least 1, got {popular_products_limit}"
            )
        if error_status is None:
            error_status = settings.backend_error_status

        self.session_factory = session_factory or SessionLocal
        self.popular_products_limit = popular_products_limit
        self.error_status = error_status

    # ========================================
    # Handlers
    # ========================================

    async def fetch_dashboard_metrics(self) -> views.DashboardMetrics:
        """
        Fetch the five dashboard datasets concurrently and join them.

        All-or-nothing: the first failing read cancels the others and the
        whole call fails with that read's error.

        Returns:
            DashboardMetrics with popular products (top N by stock),
            sales/purchase/expense summaries (oldest first) and expenses
            by category (largest first)
        """
        try:
            async with asyncio.TaskGroup() as tg:
                top_products = tg.create_task(self._fetch_all(
                    select(products)
                    .order_by(products.c.stock_quantity.desc())
                    .limit(self.popular_products_limit),
                    map_product
                ))
                sales = tg.create_task(self._fetch_all(
                    select(sales_summary).order_by(sales_summary.c.date.asc()),
                    map_sales_summary
                ))
                purchases = tg.create_task(self._fetch_all(
                    select(purchase_summary).order_by(purchase_summary.c.date.asc()),
                    map_purchase_summary
                ))
                expenses = tg.create_task(self._fetch_all(
                    select(expense_summary).order_by(expense_summary.c.date.asc()),
                    map_expense_summary
                ))
                by_category = tg.create_task(self._fetch_all(
                    select(expense_by_category).order_by(expense_by_category.c.amount.desc()),
                    map_expense_by_category
                ))
        except ExceptionGroup as group:
            # TaskGroup records failures in completion order
            first = group.exceptions[0]
            raise self._fail("fetch_dashboard_metrics", first) from first

        logger.debug(
            "Dashboard metrics: %d products, %d sales, %d purchases, %d expenses, %d categories",
            len(top_products.result()), len(sales.result()), len(purchases.result()),
            len(expenses.result()), len(by_category.result())
        )
        return views.DashboardMetrics(
            popular_products=top_products.result(),
            sales_summary=sales.result(),
            purchase_summary=purchases.result(),
            expense_summary=expenses.result(),
            expense_by_category_summary=by_category.result(),
        )

    async def fetch_products(self, search: Optional[str] = None) -> List[views.Product]:
        """
        Fetch products, optionally filtered by name.

        Args:
            search: Case-insensitive substring to look for in the name.
                None or "" returns every product.

        Returns:
            All matching products (no pagination)
        """
        stmt = select(products)
        if search:
            # autoescape: "%" and "_" in the search text match literally
            stmt = stmt.where(products.c.name.icontains(search, autoescape=True))
        try:
            return await self._fetch_all(stmt, map_product)
        except Exception as exc:
            raise self._fail("fetch_products", exc) from exc

    async def create_product(self, new_product: views.NewProduct) -> views.Product:
        """
        Insert one product and return it as stored.

        Args:
            new_product: Name, price, optional rating and stock quantity

        Returns:
            The created Product, including its generated id

        Raises:
            BackendOperationFailed: If storage rejects the row
                (negative price or stock, rating outside [0, 5])
        """
        stmt = (
            insert(products)
            .values(
                name=new_product.name,
                price=new_product.price,
                rating=new_product.rating,
                stock_quantity=new_product.stock_quantity,
            )
            .returning(*products.columns)
        )
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    created = map_product(result.mappings().one())
        except Exception as exc:
            raise self._fail("create_product", exc) from exc

        logger.info("Created product %s (%s)", created.product_id, created.name)
        return created

    async def fetch_users(self) -> List[views.User]:
        """Fetch every user."""
        try:
            return await self._fetch_all(select(users), map_user)
        except Exception as exc:
            raise self._fail("fetch_users", exc) from exc

    async def fetch_expenses_by_category(self) -> List[views.ExpenseByCategorySummary]:
        """Fetch expense-by-category rows, largest amount first."""
        stmt = select(expense_by_category).order_by(expense_by_category.c.amount.desc())
        try:
            return await self._fetch_all(stmt, map_expense_by_category)
        except Exception as exc:
            raise self._fail("fetch_expenses_by_category", exc) from exc

    # ========================================
    # Helpers
    # ========================================

    async def _fetch_all(
        self,
        stmt: Select,
        mapper: Callable[[Mapping[str, Any]], T]
    ) -> List[T]:
        """Run one read on its own session and map every row."""
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        logger.debug("Fetched %d rows from %s", len(rows), stmt.get_final_froms()[0].name)
        return [mapper(row) for row in rows]

    def _fail(self, operation: str, exc: BaseException) -> BackendOperationFailed:
        error = BackendOperationFailed.from_exception(exc, status=self.error_status)
        logger.error("%s failed: %s", operation, error.message)
        return error


# ========================================
# Convenience Functions
# ========================================

def get_data_gateway(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None
) -> DataGateway:
    """
    Factory function for creating a DataGateway.

    Usage:
        from inventory_gateway.services.gateway import get_data_gateway

        gateway = get_data_gateway()
        users = await gateway.fetch_users()
    """
    return DataGateway(session_factory)


# ========================================
# Demo
# ========================================

if __name__ == "__main__":
    """
    Print every handler's output as camelCase JSON.

    Run: python -m inventory_gateway.services.gateway
    (seed first with: python -m inventory_gateway.database.init_db --sample-data)
    """
    import json
    from inventory_gateway.database import engine

    async def _demo() -> None:
        gateway = DataGateway()
        try:
            metrics = await gateway.fetch_dashboard_metrics()
            print(metrics.model_dump_json(by_alias=True, indent=2))

            for label, rows in (
                ("Products matching 'lamp'", await gateway.fetch_products("lamp")),
                ("Users", await gateway.fetch_users()),
                ("Expenses by category", await gateway.fetch_expenses_by_category()),
            ):
                print(f"\n{label}:")
                dumped = [row.model_dump(mode="json", by_alias=True) for row in rows]
                print(json.dumps(dumped, indent=2))
        except BackendOperationFailed as exc:
            print(f"❌ {exc.to_envelope()}")
        finally:
            await engine.dispose()

    setup_logging()
    asyncio.run(_demo())
