"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_osrm_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.osrm_client import check_health as osrm_health_check
    return osrm_health_check


@router.get("/health/osrm", status_code=status.HTTP_200_OK)
def health_osrm() -> dict:
    """Check OSRM service health."""
    if not settings.osrm_base_url:
        return {"service": "osrm", "configured": False, "healthy": False}
    try:
        osrm_health_check = _get_osrm_health_check()
        status_flag = osrm_health_check()
        return {"service": "osrm", "configured": True, "healthy": status_flag}
    except Exception as e:
        return {"service": "osrm", "configured": True, "healthy": False, "error": str(e)}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check that the settings store is reachable."""
    from ...data.settings_repository import SETTINGS_TABLE
    from ...db.supabase import get_supabase_client, supabase_configured

    if not supabase_configured():
        return {
            "configured": False,
            "message": "Supabase not configured. Set FIELDROUTE_SUPABASE_URL and FIELDROUTE_SUPABASE_KEY.",
        }

    supabase = get_supabase_client()
    if not supabase:
        return {"configured": True, "connected": False, "message": "Supabase client could not be created."}

    try:
        response = supabase.table(SETTINGS_TABLE).select("setting_name").execute()
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    profiles = [row.get("setting_name") for row in response.data or []]
    return {"configured": True, "connected": True, "settings_profiles": profiles}
