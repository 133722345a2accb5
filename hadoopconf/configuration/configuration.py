"""Overlay-able key/value configuration built from Hadoop XML resources.

Resources are applied in the order they were added, after the class's
built-in defaults; a later resource overrides keys set by an earlier one.
Properties are loaded lazily on first access and reloaded whenever a new
resource is added. Values set programmatically are kept in an overlay that
survives reloads.
"""

import os
import re
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from hadoopconf.configuration.resources import Resource, load_resource
from hadoopconf.exceptions import SubstitutionDepthError
from hadoopconf.io.datastream import DataInput, DataOutput

VAR_PATTERN = re.compile(r"\$\{[^}$\s]+\}")
MAX_SUBST = 20

# Source recorded for values that were not loaded from a resource
PROGRAMMATIC_SOURCE = "programmatically"


class Configuration:
    """Ordered collection of string properties loaded from resources."""

    DEFAULT_RESOURCES: ClassVar[tuple[str, ...]] = ()

    def __init__(self, load_defaults: bool = True) -> None:
        self._load_defaults = load_defaults
        self._resources: list[Resource] = []
        self._properties: dict[str, str] | None = None
        self._overlay: dict[str, str] = {}
        self._sources: dict[str, list[str]] = {}

    @property
    def load_defaults(self) -> bool:
        return self._load_defaults

    @property
    def resources(self) -> tuple[str, ...]:
        """Names of all resources, defaults first, in load order."""
        return tuple(resource.name for resource in self._all_resources())

    def add_resource(self, path: str | Path) -> None:
        """Add a file resource.

        The file is not checked for existence; a missing file is skipped when
        properties are (re)loaded.
        """
        self._resources.append(Resource.from_path(path))
        self.reload_configuration()

    def reload_configuration(self) -> None:
        """Drop loaded properties so resources are re-read on next access."""
        self._properties = None

    def _all_resources(self) -> list[Resource]:
        defaults: list[Resource] = []
        if self._load_defaults:
            defaults = [Resource.builtin(name) for name in self.DEFAULT_RESOURCES]
        return defaults + self._resources

    def _get_props(self) -> dict[str, str]:
        if self._properties is None:
            properties: dict[str, str] = {}
            sources: dict[str, list[str]] = {}
            for resource in self._all_resources():
                loaded = load_resource(resource)
                if loaded is None:
                    continue
                for key, value in loaded:
                    properties[key] = value
                    sources[key] = [resource.name]

            for key, value in self._overlay.items():
                properties[key] = value
                sources[key] = self._sources.get(key, [PROGRAMMATIC_SOURCE])

            self._properties = properties
            self._sources = sources
        return self._properties

    def get_raw(self, key: str, default: str | None = None) -> str | None:
        """Return the value of key without variable substitution."""
        return self._get_props().get(key, default)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value of key with ``${var}`` references expanded.

        ``${name}`` expands to another property, ``${env.NAME}`` to an
        environment variable. Unresolvable references are left as-is.
        """
        value = self.get_raw(key)
        if value is None:
            return default
        return self.substitute_vars(value)

    def substitute_vars(self, expr: str) -> str:
        for _ in range(MAX_SUBST):
            expanded = VAR_PATTERN.sub(self._expand_match, expr)
            if expanded == expr:
                return expr
            expr = expanded
        raise SubstitutionDepthError(
            f"Variable substitution depth too large: {MAX_SUBST} {expr}"
        )

    def _expand_match(self, match: re.Match[str]) -> str:
        var = match.group(0)[2:-1]
        if var.startswith("env."):
            replacement = os.environ.get(var[len("env."):])
        else:
            replacement = self.get_raw(var)
        return match.group(0) if replacement is None else replacement

    def set(self, key: str, value: str, source: str = PROGRAMMATIC_SOURCE) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("Configuration keys and values must be strings")
        self._overlay[key] = value
        self._get_props()[key] = value
        self._sources[key] = [source]

    def unset(self, key: str) -> None:
        self._overlay.pop(key, None)
        self._get_props().pop(key, None)
        self._sources.pop(key, None)

    def get_property_sources(self, key: str) -> list[str] | None:
        """Return the resources that last set key, or None if unset."""
        self._get_props()
        sources = self._sources.get(key)
        return list(sources) if sources is not None else None

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate over (key, raw value) pairs."""
        return iter(list(self._get_props().items()))

    def to_dict(self) -> dict[str, str]:
        return dict(self._get_props())

    def clear(self) -> None:
        self._properties = {}
        self._overlay = {}
        self._sources = {}

    def __len__(self) -> int:
        return len(self._get_props())

    def __contains__(self, key: object) -> bool:
        return key in self._get_props()

    def __repr__(self) -> str:
        return f"{type(self).__name__}: {', '.join(self.resources)}"

    def write(self, out: DataOutput) -> None:
        """Write all properties in Hadoop's Configuration Writable format.

        Layout: VInt property count, then for each property its key and value
        as Text strings and the resources that set it as a compressed string
        array.
        """
        properties = self._get_props()
        out.write_vint(len(properties))
        for key, value in properties.items():
            out.write_string(key)
            out.write_string(value)
            out.write_compressed_string_array(self._sources.get(key))

    def read_fields(self, inp: DataInput) -> None:
        """Replace all properties with those read from inp."""
        self.clear()
        size = inp.read_vint()
        for _ in range(size):
            key = inp.read_string()
            value = inp.read_string()
            self.set(key, value)
            sources = inp.read_compressed_string_array()
            if sources is not None:
                self._sources[key] = [source for source in sources if source is not None]


class HdfsConfiguration(Configuration):
    """Configuration pre-seeded with the HDFS default and site resources."""

    DEFAULT_RESOURCES: ClassVar[tuple[str, ...]] = ("hdfs-default.xml", "hdfs-site.xml")
