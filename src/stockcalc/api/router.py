"""Top-level API router: mounts the domain routers under /api/v1."""

from fastapi import APIRouter

from stockcalc.api.routes import calculator, stocks

api_router = APIRouter()
api_router.include_router(stocks.router, prefix="/stocks", tags=["stocks"])
api_router.include_router(calculator.router, prefix="/calculator", tags=["calculator"])
