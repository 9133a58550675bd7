# app/api/customers.py

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.engine import get_engine
from app.db.schema import customers, invoices
from app.models.customers import (
    CustomerField,
    FilteredCustomer,
    FilteredCustomersResponse,
)
from app.utils import format_currency

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/", response_model=List[CustomerField])
async def list_customers(engine: AsyncEngine = Depends(get_engine)) -> List[CustomerField]:
    """
    Return every customer's id and name, ordered by name.
    """
    stmt = select(customers.c.id, customers.c.name).order_by(customers.c.name)

    async with engine.connect() as conn:
        rows = (await conn.execute(stmt)).mappings().all()

    return [CustomerField(id=row["id"], name=row["name"]) for row in rows]


@router.get("/filtered", response_model=FilteredCustomersResponse)
async def list_filtered_customers(
    query: str = Query("", description="Case-insensitive match on name or email"),
    engine: AsyncEngine = Depends(get_engine),
) -> FilteredCustomersResponse:
    """
    Customers matching query with their invoice count and paid/pending totals.
    """
    pattern = f"%{query}%"

    def total_for(status: str):
        return func.coalesce(
            func.sum(case((invoices.c.status == status, invoices.c.amount), else_=0)), 0
        )

    stmt = (
        select(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
            func.count(invoices.c.id).label("total_invoices"),
            total_for("pending").label("total_pending"),
            total_for("paid").label("total_paid"),
        )
        .select_from(customers.outerjoin(invoices, invoices.c.customer_id == customers.c.id))
        .where(or_(customers.c.name.ilike(pattern), customers.c.email.ilike(pattern)))
        .group_by(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .order_by(customers.c.name)
    )

    async with engine.connect() as conn:
        rows = (await conn.execute(stmt)).mappings().all()

    items = [
        FilteredCustomer(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row["image_url"],
            total_invoices=row["total_invoices"],
            total_pending=format_currency(row["total_pending"]),
            total_paid=format_currency(row["total_paid"]),
        )
        for row in rows
    ]

    return FilteredCustomersResponse(items=items, total=len(items))
