# app/api/dashboard.py

import asyncio
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.engine import get_engine
from app.db.schema import customers, invoices, revenue
from app.models.dashboard import CardData, RevenueOut
from app.models.invoices import LatestInvoice
from app.settings import SETTINGS
from app.utils import format_currency

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


async def _fetch_one(engine: AsyncEngine, stmt):
    async with engine.connect() as conn:
        return (await conn.execute(stmt)).one()


@router.get("/revenue", response_model=List[RevenueOut])
async def fetch_revenue(engine: AsyncEngine = Depends(get_engine)) -> List[RevenueOut]:
    """
    Monthly revenue in calendar order.
    """
    async with engine.connect() as conn:
        rows = (await conn.execute(select(revenue.c.month, revenue.c.revenue))).mappings().all()

    position = {m: i for i, m in enumerate(MONTHS)}
    rows = sorted(rows, key=lambda r: position.get(r["month"], len(MONTHS)))

    return [RevenueOut(month=row["month"], revenue=row["revenue"]) for row in rows]


@router.get("/latest-invoices", response_model=List[LatestInvoice])
async def fetch_latest_invoices(engine: AsyncEngine = Depends(get_engine)) -> List[LatestInvoice]:
    """
    Most recent invoices with their customer's name, email and image.
    """
    stmt = (
        select(
            invoices.c.id,
            invoices.c.amount,
            customers.c.name,
            customers.c.image_url,
            customers.c.email,
        )
        .select_from(invoices.join(customers, invoices.c.customer_id == customers.c.id))
        .order_by(invoices.c.date.desc(), invoices.c.id)
        .limit(SETTINGS.latest_invoices_limit)
    )

    async with engine.connect() as conn:
        rows = (await conn.execute(stmt)).mappings().all()

    return [
        LatestInvoice(
            id=row["id"],
            name=row["name"],
            image_url=row["image_url"],
            email=row["email"],
            amount=format_currency(row["amount"]),
        )
        for row in rows
    ]


@router.get("/cards", response_model=CardData)
async def fetch_card_data(engine: AsyncEngine = Depends(get_engine)) -> CardData:
    """
    Summary card totals. The three queries are independent and run together.
    """
    invoice_count_stmt = select(func.count()).select_from(invoices)
    customer_count_stmt = select(func.count()).select_from(customers)
    status_stmt = select(
        func.coalesce(
            func.sum(case((invoices.c.status == "paid", invoices.c.amount), else_=0)), 0
        ).label("paid"),
        func.coalesce(
            func.sum(case((invoices.c.status == "pending", invoices.c.amount), else_=0)), 0
        ).label("pending"),
    )

    invoice_count, customer_count, totals = await asyncio.gather(
        _fetch_one(engine, invoice_count_stmt),
        _fetch_one(engine, customer_count_stmt),
        _fetch_one(engine, status_stmt),
    )

    return CardData(
        number_of_invoices=invoice_count[0],
        number_of_customers=customer_count[0],
        total_paid_invoices=format_currency(totals.paid),
        total_pending_invoices=format_currency(totals.pending),
    )
