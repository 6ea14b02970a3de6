"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...events import broadcaster

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database configuration and connectivity."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set SWMS_SUPABASE_URL and SWMS_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table("bins").select("id", count="exact").limit(1).execute()
        return {"configured": True, "connected": True, "message": "Database connected."}
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }


@router.get("/health/events", status_code=status.HTTP_200_OK)
def check_events() -> dict:
    """Report how many live listeners are connected."""
    return {"listeners": broadcaster.listener_count}
