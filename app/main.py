from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.auth import router as auth_router
from app.api.customers import router as customers_router
from app.api.dashboard import router as dashboard_router
from app.api.invoices import router as invoices_router
from app.db.engine import get_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_engine().dispose()


app = FastAPI(
    title="Invoices Dashboard API",
    version="0.1.0",
    lifespan=lifespan,
)

@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(dashboard_router)
app.include_router(invoices_router)
app.include_router(customers_router)
app.include_router(auth_router)
