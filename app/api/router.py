# app/api/router.py
from fastapi import APIRouter
from app.modules.expenses.router import router as expenses_router
from app.modules.receipts.router import router as receipts_router, upload_router
from app.modules.users.router import router as users_router, login_router


# Router principal de la API
api_router = APIRouter()

api_router.include_router(
    expenses_router,
    prefix="/expenses",
    tags=["Expenses"]
)

api_router.include_router(
    receipts_router,
    prefix="/receipts",
    tags=["Receipts"]
)

api_router.include_router(
    upload_router,
    prefix="/upload",
    tags=["Receipts"]
)

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)

api_router.include_router(
    login_router,
    prefix="/login",
    tags=["Users"]
)
