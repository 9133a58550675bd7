# app/models/invoices.py

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

InvoiceStatus = Literal["pending", "paid"]


class InvoiceSeed(BaseModel):
    # Fixture invoices usually carry no id; the loader pins one per record.
    id: Optional[str] = None
    customer_id: str
    amount: int = Field(ge=0, description="Amount in cents")
    status: InvoiceStatus
    date: date


class LatestInvoice(BaseModel):
    id: str
    name: str
    image_url: str
    email: str
    amount: str


class InvoiceRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int
    status: InvoiceStatus


class InvoicePage(BaseModel):
    items: List[InvoiceRow]
    page: int
    total_pages: int


class InvoicePages(BaseModel):
    total_pages: int


class InvoiceForm(BaseModel):
    id: str
    customer_id: str
    amount: float  # dollars
    status: InvoiceStatus
