"""API version 1 routes."""

from fastapi import APIRouter

from statement_import.api.v1 import imports

router = APIRouter(prefix="/api/v1")

router.include_router(imports.router)
