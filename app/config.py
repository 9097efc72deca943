"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from db.config import get_bool_env, get_float_env, get_int_env


@dataclass(frozen=True)
class CampaignImportSettings:
    """
    Runtime settings for campaign file imports.

    ``max_display_errors`` and ``preview_rows`` only trim what is shown;
    validation always runs over the whole file.
    """

    max_display_errors: int = 5
    preview_rows: int = 5
    log_validation_errors: bool = True
    record_blocked_imports: bool = False
    max_upload_bytes: int = 5 * 1024 * 1024


@dataclass(frozen=True)
class DashboardDefaults:
    """
    Fallbacks used before dashboard settings are saved.
    """

    cpl_alert: float = 50.0


@lru_cache(maxsize=1)
def get_campaign_import_settings() -> CampaignImportSettings:
    """
    Return cached campaign import settings from environment variables.
    """

    return CampaignImportSettings(
        max_display_errors=max(1, get_int_env("CAMPAIGN_IMPORT_MAX_DISPLAY_ERRORS", 5)),
        preview_rows=max(0, get_int_env("CAMPAIGN_IMPORT_PREVIEW_ROWS", 5)),
        log_validation_errors=get_bool_env("CAMPAIGN_IMPORT_LOG_VALIDATION_ERRORS", True),
        record_blocked_imports=get_bool_env("CAMPAIGN_IMPORT_RECORD_BLOCKED", False),
        max_upload_bytes=max(1, get_int_env("CAMPAIGN_IMPORT_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)),
    )


@lru_cache(maxsize=1)
def get_dashboard_defaults() -> DashboardDefaults:
    """
    Return cached dashboard fallbacks from environment variables.
    """

    return DashboardDefaults(
        cpl_alert=max(0.0, get_float_env("DASHBOARD_DEFAULT_CPL_ALERT", 50.0)),
    )
