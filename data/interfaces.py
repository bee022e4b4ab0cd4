"""
Abstract Data Provider interface for pluggable city data.

Allows swapping the built-in city layout for a real emission inventory
without changing the engine or the interface.
"""

import json
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from config import CAPTURE_UNITS
from models.entities import DeviceSpec, EmissionSource, device_catalog


class DataProvider(ABC):
    """Abstract base class for city data sources.

    Sources and specs are frozen dataclasses; the returned lists and dicts
    are fresh and may be modified by the caller.
    """

    @abstractmethod
    def get_emission_sources(self) -> List[EmissionSource]:
        """Return the static emission source catalog."""
        ...

    @abstractmethod
    def get_device_catalog(self) -> Dict[str, DeviceSpec]:
        """Return the kind -> DeviceSpec mapping of placeable capture units."""
        ...


class MockDataProvider(DataProvider):
    """Built-in city layout and capture unit catalog."""

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed

    def get_emission_sources(self) -> List[EmissionSource]:
        from data.city_layout import get_emission_sources
        if self._seed is None:
            return get_emission_sources()
        return get_emission_sources(seed=self._seed)

    def get_device_catalog(self) -> Dict[str, DeviceSpec]:
        return device_catalog(CAPTURE_UNITS)


class FileDataProvider(DataProvider):
    """Load city data from JSON files on disk.

    Args:
        sources_path: Path to a JSON array of source objects with keys
            'id', 'x', 'y', 'category', 'base_rate'.
        catalog_path: Optional path to a JSON object mapping device kind to
            an object with 'capture_rate', 'radius', 'cost' (and optionally
            'name', 'color').  Defaults to the configured capture units.

    Raises:
        ValueError: If required keys are missing or data is invalid.
        FileNotFoundError: If any file does not exist.
    """

    _REQUIRED_SOURCE_KEYS = {"id", "x", "y", "category", "base_rate"}
    _REQUIRED_DEVICE_KEYS = {"capture_rate", "radius", "cost"}

    def __init__(self, sources_path: str, catalog_path: Optional[str] = None):
        self._sources = self._load_sources(sources_path)
        if catalog_path:
            self._catalog = self._load_catalog(catalog_path)
        else:
            self._catalog = device_catalog(CAPTURE_UNITS)

    # -- loaders with validation ------------------------------------------

    @classmethod
    def _load_sources(cls, path: str) -> List[EmissionSource]:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, list) or len(data) == 0:
            raise ValueError(f"Sources file must contain a non-empty JSON array: {path}")
        sources = []
        for i, src in enumerate(data):
            missing = cls._REQUIRED_SOURCE_KEYS - set(src.keys())
            if missing:
                raise ValueError(
                    f"Source #{i} missing required keys {missing} in {path}"
                )
            sources.append(
                EmissionSource(
                    id=str(src["id"]),
                    x=int(src["x"]),
                    y=int(src["y"]),
                    category=src["category"],
                    base_rate=float(src["base_rate"]),
                )
            )
        return sources

    @classmethod
    def _load_catalog(cls, path: str) -> Dict[str, DeviceSpec]:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict) or len(data) == 0:
            raise ValueError(f"Device catalog must be a non-empty JSON object: {path}")
        for kind, params in data.items():
            missing = cls._REQUIRED_DEVICE_KEYS - set(params.keys())
            if missing:
                raise ValueError(
                    f"Device kind '{kind}' missing required keys {missing} in {path}"
                )
            radius = params["radius"]
            if isinstance(radius, bool) or not isinstance(radius, (int, float)) \
                    or (isinstance(radius, float) and not radius.is_integer()):
                raise ValueError(
                    f"Device kind '{kind}' has non-integer radius {radius!r} in {path}"
                )
        return device_catalog(data)

    # -- DataProvider interface -------------------------------------------

    def get_emission_sources(self) -> List[EmissionSource]:
        return list(self._sources)

    def get_device_catalog(self) -> Dict[str, DeviceSpec]:
        return dict(self._catalog)
