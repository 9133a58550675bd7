# app/api/invoices.py

import math
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.engine import get_engine
from app.db.schema import invoices, customers
from app.models.invoices import (
    InvoiceForm,
    InvoicePage,
    InvoicePages,
    InvoiceRow,
)
from app.settings import SETTINGS

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _matches(query: str):
    """
    Case-insensitive substring match on customer name/email and
    invoice amount/date/status.
    """
    pattern = f"%{query}%"
    return or_(
        customers.c.name.ilike(pattern),
        customers.c.email.ilike(pattern),
        cast(invoices.c.amount, String).ilike(pattern),
        cast(invoices.c.date, String).ilike(pattern),
        invoices.c.status.ilike(pattern),
    )


def _joined():
    return invoices.join(customers, invoices.c.customer_id == customers.c.id)


def _row_to_invoice(row) -> InvoiceRow:
    return InvoiceRow(
        id=row["id"],
        customer_id=row["customer_id"],
        name=row["name"],
        email=row["email"],
        image_url=row["image_url"],
        date=row["date"],
        amount=row["amount"],
        status=row["status"],
    )


async def _count_pages(engine: AsyncEngine, query: str) -> int:
    count_stmt = select(func.count()).select_from(_joined()).where(_matches(query))
    async with engine.connect() as conn:
        total = (await conn.execute(count_stmt)).scalar_one()
    return math.ceil(total / SETTINGS.items_per_page)


@router.get("/", response_model=InvoicePage)
async def list_invoices(
    query: str = Query("", description="Search text; empty matches everything"),
    page: int = Query(1, ge=1),
    engine: AsyncEngine = Depends(get_engine),
) -> InvoicePage:
    """
    One page of invoices matching query, newest first.
    """
    offset = (page - 1) * SETTINGS.items_per_page

    stmt = (
        select(
            invoices.c.id,
            invoices.c.customer_id,
            invoices.c.amount,
            invoices.c.date,
            invoices.c.status,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .select_from(_joined())
        .where(_matches(query))
        .order_by(invoices.c.date.desc(), invoices.c.id)
        .limit(SETTINGS.items_per_page)
        .offset(offset)
    )

    async with engine.connect() as conn:
        rows = (await conn.execute(stmt)).mappings().all()

    items: List[InvoiceRow] = [_row_to_invoice(row) for row in rows]

    return InvoicePage(
        items=items,
        page=page,
        total_pages=await _count_pages(engine, query),
    )


@router.get("/pages", response_model=InvoicePages)
async def invoice_pages(
    query: str = Query(""),
    engine: AsyncEngine = Depends(get_engine),
) -> InvoicePages:
    return InvoicePages(total_pages=await _count_pages(engine, query))


@router.get("/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(
    invoice_id: uuid.UUID,
    engine: AsyncEngine = Depends(get_engine),
) -> InvoiceForm:
    """
    Look up a single invoice by id; amount is returned in dollars.
    """
    stmt = select(
        invoices.c.id,
        invoices.c.customer_id,
        invoices.c.amount,
        invoices.c.status,
    ).where(invoices.c.id == str(invoice_id))

    async with engine.connect() as conn:
        row = (await conn.execute(stmt)).mappings().first()

    if row is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return InvoiceForm(
        id=row["id"],
        customer_id=row["customer_id"],
        amount=row["amount"] / 100,
        status=row["status"],
    )
