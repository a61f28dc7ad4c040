"""API routes."""

from fastapi import APIRouter

from ebookshare.api import admin, auth, ebooks, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["User"])
router.include_router(users.router, tags=["User"])
router.include_router(ebooks.router, tags=["eBooks"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
