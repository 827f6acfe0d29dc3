"""Optimization settings loader with database-first approach, falling back to defaults."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ..config import settings
from ..db.supabase import get_supabase_client
from ..schemas.settings import OptimizationSettings

SETTINGS_TABLE = "route_optimization_settings"


def _load_settings_from_database(setting_name: str) -> OptimizationSettings | None:
    """Load a named profile from Supabase. Returns None if unavailable, missing or invalid."""
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        response = (
            supabase.table(SETTINGS_TABLE)
            .select("*")
            .eq("setting_name", setting_name)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logging.warning(f"Failed to read optimization settings '{setting_name}': {e}")
        return None

    if not response.data:
        logging.warning(f"Optimization settings '{setting_name}' not found")
        return None

    try:
        return OptimizationSettings.model_validate(response.data[0])
    except ValidationError as e:
        logging.warning(f"Invalid optimization settings row '{setting_name}': {e}")
        return None


def get_optimization_settings(setting_name: str | None = None) -> OptimizationSettings:
    """Get a settings profile from the database, or the built-in defaults."""
    name = setting_name or settings.default_settings_profile
    loaded = _load_settings_from_database(name)
    if loaded is not None:
        return loaded

    logging.info(f"Using default optimization settings in place of profile '{name}'")
    return OptimizationSettings()
