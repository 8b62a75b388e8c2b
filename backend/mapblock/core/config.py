"""Application settings and configuration management.

This module provides Pydantic-based settings management that loads
configuration from environment variables or a .env file. Settings include
the Google Maps browser API key, the base geo coordinates used when a map
block does not supply its own center, CORS origins, the log level and the
URLs of the browser assets a rendered map needs.

Example:
    Settings can be accessed via the cached get_settings() function:
        >>> from mapblock.core.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.base_latitude, settings.base_longitude)

    Environment variables can override defaults:
        >>> GOOGLE_MAPS_BROWSER_KEY=AIza...
        >>> BASE_LATITUDE=40.7128
        >>> BASE_LONGITUDE=-74.0060
"""

import functools

import pydantic_settings


class Settings(pydantic_settings.BaseSettings):
    """Runtime configuration pulled from environment variables or defaults.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        google_maps_browser_key: Google Maps JavaScript API browser key. When
            empty, maps fall back to the Wikimedia base layer.
        base_latitude: Latitude used when a map block omits ``latitude``.
        base_longitude: Longitude used when a map block omits ``longitude``.
        allow_origins: List of allowed CORS origins (["*"] allows all).
        log_level: Level name applied to the ``mapblock`` logger.
        leaflet_css_url: Stylesheet URL for Leaflet.
        leaflet_js_url: Script URL for Leaflet.
        google_maps_js_url: Script URL for the Google Maps JavaScript API,
            without the ``key`` query parameter.
        google_mutant_js_url: Script URL for the Leaflet GoogleMutant plugin.

    Example:
        Create settings with custom values:
            >>> settings = Settings(
            ...     google_maps_browser_key="ABC123",
            ...     base_latitude=51.5072,
            ...     base_longitude=-0.1276,
            ... )
    """

    google_maps_browser_key: str = ""
    base_latitude: float = 39.8283
    base_longitude: float = -98.5795
    allow_origins: list[str] = ["*"]
    log_level: str = "INFO"
    leaflet_css_url: str = "https://unpkg.com/leaflet@1.9.4/dist/leaflet.css"
    leaflet_js_url: str = "https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"
    google_maps_js_url: str = "https://maps.googleapis.com/maps/api/js"
    google_mutant_js_url: str = (
        "https://unpkg.com/leaflet.gridlayer.googlemutant@0.14.1"
        "/dist/Leaflet.GoogleMutant.js"
    )

    model_config = pydantic_settings.SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@functools.lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables or .env file and cached
    for the lifetime of the application. Subsequent calls return the same
    cached instance.

    Returns:
        Settings instance with all configuration values populated.

    Example:
        The settings are cached, so multiple calls return the same instance:
            >>> settings1 = get_settings()
            >>> settings2 = get_settings()
            >>> assert settings1 is settings2  # Same instance
    """
    return Settings()
