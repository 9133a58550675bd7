# app/models/customers.py

from typing import List

from pydantic import BaseModel


class CustomerSeed(BaseModel):
    id: str
    name: str
    email: str
    image_url: str


class CustomerField(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class FilteredCustomer(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


class FilteredCustomersResponse(BaseModel):
    items: List[FilteredCustomer]
    total: int
