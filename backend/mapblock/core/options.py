"""Options lookup used by the map block shortcode.

The map block reads two pieces of site configuration: the Google Maps
browser API key and the base geo coordinates used when a block does not set
its own center. Both are reached through ``OptionsProtocol`` so the builder
does not care whether they come from application settings or from a plain
dictionary in tests.

Example:
    Resolve options from settings:
        >>> from mapblock.core import config, options
        >>> opts = options.get_options(config.get_settings())
        >>> opts.get("connections", "google_maps_geocoding_api", "browser_key")
        ''
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypedDict

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mapblock.core import config

OptionKey = tuple[str, str, str]

BROWSER_KEY: OptionKey = ("connections", "google_maps_geocoding_api", "browser_key")


class GeoCoordinates(TypedDict):
    latitude: float
    longitude: float


class OptionsProtocol(Protocol):
    """Protocol interface for reading site options.

    Implementations resolve a (section, option, key) triple to a string and
    expose the base geo coordinates of the site.
    """

    def get(self, section: str, option: str, key: str, default: str = "") -> str: ...

    def get_base_geo_coordinates(self) -> GeoCoordinates: ...


class InMemoryOptions(OptionsProtocol):
    """Dictionary-backed options for tests and local development."""

    def __init__(
        self,
        values: Mapping[OptionKey, str] | None = None,
        base_geo: GeoCoordinates | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            values: Option values keyed by (section, option, key).
            base_geo: Base coordinates, defaults to (0, 0).
        """
        self._values: dict[OptionKey, str] = dict(values or {})
        self._base_geo: GeoCoordinates = base_geo or {"latitude": 0.0, "longitude": 0.0}

    def get(self, section: str, option: str, key: str, default: str = "") -> str:
        """Look up an option value.

        Args:
            section: Option section, e.g. "connections".
            option: Option group within the section.
            key: Key within the option group.
            default: Returned when the option is not set.

        Returns:
            The stored value or ``default``.
        """
        return self._values.get((section, option, key), default)

    def get_base_geo_coordinates(self) -> GeoCoordinates:
        return GeoCoordinates(**self._base_geo)


class SettingsOptions(OptionsProtocol):
    """Options resolved from application ``Settings``.

    Only the options the map block needs are mapped; anything else resolves
    to the supplied default.
    """

    def __init__(self, settings: config.Settings) -> None:
        self.settings = settings

    def get(self, section: str, option: str, key: str, default: str = "") -> str:
        if (section, option, key) == BROWSER_KEY:
            return self.settings.google_maps_browser_key.strip() or default

        return default

    def get_base_geo_coordinates(self) -> GeoCoordinates:
        return {
            "latitude": self.settings.base_latitude,
            "longitude": self.settings.base_longitude,
        }


def get_options(settings: config.Settings) -> OptionsProtocol:
    """Return the options implementation for the given settings.

    Args:
        settings: Application settings.

    Returns:
        OptionsProtocol implementation (SettingsOptions in production).
    """
    return SettingsOptions(settings)
