# app/models/dashboard.py

from pydantic import BaseModel, Field


class RevenueSeed(BaseModel):
    month: str = Field(max_length=4)
    revenue: int


class RevenueOut(BaseModel):
    month: str
    revenue: int

    class Config:
        from_attributes = True


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str
