# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MongoConfig (dataclass)
#     host: str            (default "localhost")
#     port: int            (default 27017)
#     user: str | None     (default None)
#     password: str | None (default None)
#     database: str        (default "form_builder")
#
# - CollectionsConfig (dataclass)
#     forms: str           (default "forms")
#     submissions: str     (default "form_submissions")
#     views: str           (default "form_views")
#
# - AnalyticsConfig (dataclass)
#     dashboard_window_days: int  (default 30)
#     form_window_days: int       (default 7)
#     max_drop_off_points: int    (default 5)
#     timezone: str               (default "UTC")
#
# - AppConfig (dataclass)
#     mongo: MongoConfig
#     collections: CollectionsConfig
#     analytics: AnalyticsConfig
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests change the environment).
#
# USAGE:
# ------
#   from form_analytics.config import get_config
#   config = get_config()
#   print(config.mongo.host)
#   print(config.analytics.form_window_days)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class MongoConfig:
    """MongoDB connection configuration."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "form_builder"


@dataclass
class CollectionsConfig:
    """Names of the collections holding forms, submissions and views."""
    forms: str = "forms"
    submissions: str = "form_submissions"
    views: str = "form_views"


@dataclass
class AnalyticsConfig:
    """Tuning for the aggregation engine."""
    dashboard_window_days: int = 30
    form_window_days: int = 7
    max_drop_off_points: int = 5
    timezone: str = "UTC"  # Day boundary used for trend buckets


@dataclass
class AppConfig:
    """Main application configuration."""
    mongo: MongoConfig = field(default_factory=MongoConfig)
    collections: CollectionsConfig = field(default_factory=CollectionsConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build MongoDB configuration
    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=int(os.getenv("MONGO_PORT", "27017")),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "form_builder")
    )

    # Build collection names
    collections_config = CollectionsConfig(
        forms=os.getenv("FORMS_COLLECTION", "forms"),
        submissions=os.getenv("SUBMISSIONS_COLLECTION", "form_submissions"),
        views=os.getenv("VIEWS_COLLECTION", "form_views")
    )

    # Build analytics configuration
    analytics_config = AnalyticsConfig(
        dashboard_window_days=int(os.getenv("DASHBOARD_WINDOW_DAYS", "30")),
        form_window_days=int(os.getenv("FORM_WINDOW_DAYS", "7")),
        max_drop_off_points=int(os.getenv("MAX_DROP_OFF_POINTS", "5")),
        timezone=os.getenv("ANALYTICS_TIMEZONE", "UTC")
    )

    # Build main application configuration
    _config_instance = AppConfig(
        mongo=mongo_config,
        collections=collections_config,
        analytics=analytics_config
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
