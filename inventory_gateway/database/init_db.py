"""
Database initialization and seeding.

This script:
- Creates all database tables
- Optionally seeds the sample inventory dataset
- Can reset the database (drop and recreate)

Usage:
    # Create tables only
    python -m inventory_gateway.database.init_db

    # Reset database (drops all tables and recreates)
    python -m inventory_gateway.database.init_db --reset

    # Add sample data for development
    python -m inventory_gateway.database.init_db --sample-data
"""

import argparse
import asyncio
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from inventory_gateway.core.logging import setup_logging
from inventory_gateway.database.session import (
    SessionLocal,
    create_all_tables,
    drop_all_tables,
    engine,
    get_db_context,
)
from inventory_gateway.models import (
    ExpenseByCategory,
    ExpenseSummary,
    Product,
    PurchaseSummary,
    SalesSummary,
    User,
)


# ========================================
# Sample Data
# ========================================

SAMPLE_PRODUCTS = [
    # (name, price, rating, stock_quantity)
    ("Laptop", 999.99, 4.5, 50),
    ("Wireless Mouse", 29.99, 4.2, 200),
    ("Keyboard", 79.99, 4.7, 150),
    ("Monitor", 299.99, 4.6, 75),
    ("USB Cable", 9.99, 4.0, 500),
    ("Headphones", 149.99, 4.8, 100),
    ("Webcam", 89.99, 4.3, 80),
    ("Desk Lamp", 39.99, 4.1, 120),
]

SAMPLE_USERS = [
    ("John Doe", "john.doe@example.com"),
    ("Jane Smith", "jane.smith@example.com"),
    ("Bob Johnson", "bob.johnson@example.com"),
    ("Alice Williams", "alice.williams@example.com"),
    ("Charlie Brown", "charlie.brown@example.com"),
]

# Oldest first: index 0 is six days ago, index 6 is today
SAMPLE_SALES = [
    (15000, 12.5), (16200, 8.0), (14800, -8.6), (17500, 18.2),
    (16900, -3.4), (18200, 7.7), (19000, 4.4),
]

SAMPLE_PURCHASES = [
    (8000, 15.0), (8500, 6.25), (7800, -8.2), (9200, 17.9),
    (8900, -3.3), (9500, 6.7), (10000, 5.3),
]

SAMPLE_EXPENSES = [3500, 3800, 3200, 4100, 3900, 4200, 4500]

SAMPLE_EXPENSE_CATEGORIES = [
    ("Office Supplies", 500),
    ("Salaries", 2500),
    ("Utilities", 300),
    ("Marketing", 800),
    ("Equipment", 400),
]


def _last_days(count: int, today: Optional[date] = None) -> list[date]:
    today = today or date.today()
    return [today - timedelta(days=count - 1 - i) for i in range(count)]


async def _count(db: AsyncSession, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


async def _is_empty(db: AsyncSession, model) -> bool:
    return await _count(db, model) == 0


async def create_tables(reset: bool = False, engine_instance: Optional[AsyncEngine] = None) -> None:
    """
    Create all database tables.

    Args:
        reset: If True, drop existing tables first
        engine_instance: Engine to use (defaults to the global one)
    """
    if reset:
        print("🗑️  Dropping existing tables...")
        await drop_all_tables(engine_instance)
        print("✅ Tables dropped")

    print("📊 Creating database tables...")
    await create_all_tables(engine_instance)
    print("✅ Tables created")


async def seed_sample_data(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    today: Optional[date] = None
) -> None:
    """
    Seed the sample inventory dataset.

    Safe to run repeatedly: users are skipped by email, every other table
    is only filled while it is still empty.

    Args:
        session_factory: Session factory (defaults to the global one)
        today: Anchor date for the daily summaries (defaults to today)
    """
    print("\n🌱 Seeding sample data...")
    days = _last_days(7, today)

    async with get_db_context(session_factory or SessionLocal) as db:
        if await _is_empty(db, Product):
            db.add_all(
                Product(name=name, price=price, rating=rating, stock_quantity=stock)
                for name, price, rating, stock in SAMPLE_PRODUCTS
            )
            print(f"  ✅ {len(SAMPLE_PRODUCTS)} products")
        else:
            print("  ⏭️  Products already present (skipping)")

        existing_emails = set(await db.scalars(select(User.email)))
        new_users = [
            User(name=name, email=email)
            for name, email in SAMPLE_USERS
            if email not in existing_emails
        ]
        db.add_all(new_users)
        print(f"  ✅ {len(new_users)} users ({len(SAMPLE_USERS) - len(new_users)} already present)")

        if await _is_empty(db, SalesSummary):
            db.add_all(
                SalesSummary(total_value=total, change_percentage=change, date=day)
                for (total, change), day in zip(SAMPLE_SALES, days)
            )
            print(f"  ✅ {len(SAMPLE_SALES)} days of sales")
        else:
            print("  ⏭️  Sales summary already present (skipping)")

        if await _is_empty(db, PurchaseSummary):
            db.add_all(
                PurchaseSummary(total_purchased=total, change_percentage=change, date=day)
                for (total, change), day in zip(SAMPLE_PURCHASES, days)
            )
            print(f"  ✅ {len(SAMPLE_PURCHASES)} days of purchases")
        else:
            print("  ⏭️  Purchase summary already present (skipping)")

        if await _is_empty(db, ExpenseSummary):
            db.add_all(
                ExpenseSummary(total_expenses=total, date=day)
                for total, day in zip(SAMPLE_EXPENSES, days)
            )
            print(f"  ✅ {len(SAMPLE_EXPENSES)} days of expenses")
        else:
            print("  ⏭️  Expense summary already present (skipping)")

        if await _is_empty(db, ExpenseByCategory):
            db.add_all(
                ExpenseByCategory(category=category, amount=amount, date=days[-1])
                for category, amount in SAMPLE_EXPENSE_CATEGORIES
            )
            print(f"  ✅ {len(SAMPLE_EXPENSE_CATEGORIES)} expense categories")
        else:
            print("  ⏭️  Expense categories already present (skipping)")

        # Commit is done automatically by get_db_context()

    print("✅ Sample data seeded")


async def print_database_status(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None
) -> None:
    """Print current database status and counts."""
    print("\n" + "=" * 60)
    print("📊 Database Status")
    print("=" * 60)

    async with get_db_context(session_factory or SessionLocal) as db:
        for model in (Product, User, SalesSummary, PurchaseSummary, ExpenseSummary, ExpenseByCategory):
            print(f"  {model.__tablename__:<20} {await _count(db, model)}")

    print("=" * 60)


async def initialize_database(reset: bool = False, sample_data: bool = False) -> None:
    """
    Initialize the database.

    Args:
        reset: Drop existing tables before creating
        sample_data: Add sample data for development
    """
    print("=" * 60)
    print("🗄️  Database Initialization")
    print("=" * 60)

    try:
        await create_tables(reset=reset)

        if sample_data:
            await seed_sample_data()

        await print_database_status()
    finally:
        await engine.dispose()

    print("\n✅ Database initialization complete!")


def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the inventory dashboard database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create tables
  python -m inventory_gateway.database.init_db

  # Reset database (drop all tables and recreate)
  python -m inventory_gateway.database.init_db --reset

  # Full reset with sample data
  python -m inventory_gateway.database.init_db --reset --sample-data
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add the sample inventory dataset"
    )

    parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip the confirmation prompt for --reset"
    )

    args = parser.parse_args()
    setup_logging()

    # Confirm reset if requested
    if args.reset and not args.yes:
        print("⚠️  WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("❌ Aborted")
            return

    asyncio.run(initialize_database(reset=args.reset, sample_data=args.sample_data))


if __name__ == "__main__":
    main()
