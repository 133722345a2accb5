"""Loading of Hadoop XML configuration resources.

A resource is either a file on disk or a built-in file packaged under
``hadoopconf/configuration/defaults``. Both use the Hadoop layout::

    <configuration>
      <property>
        <name>fs.defaultFS</name>
        <value>hdfs://namenode:8020</value>
      </property>
    </configuration>
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from hadoopconf.exceptions import ResourceLoadError
from hadoopconf.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULTS_PACKAGE = "hadoopconf.configuration"
DEFAULTS_DIR = "defaults"


@dataclass(frozen=True)
class Resource:
    """A named source of configuration properties.

    ``path`` is None for built-in resources, which are looked up by name
    among the packaged defaults.
    """

    name: str
    path: Path | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "Resource":
        return cls(name=str(path), path=Path(path))

    @classmethod
    def builtin(cls, name: str) -> "Resource":
        return cls(name=name)

    @property
    def is_builtin(self) -> bool:
        return self.path is None


def _read_resource(resource: Resource) -> bytes | None:
    if resource.path is not None:
        if not resource.path.is_file():
            return None
        return resource.path.read_bytes()

    packaged = resources.files(DEFAULTS_PACKAGE).joinpath(DEFAULTS_DIR, resource.name)
    if not packaged.is_file():
        return None
    return packaged.read_bytes()


def parse_properties(data: bytes, name: str) -> list[tuple[str, str]]:
    """Parse Hadoop configuration XML into ordered (key, value) pairs.

    Raises:
        ResourceLoadError: If the document is not well-formed or its root
            element is not <configuration>
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ResourceLoadError(f"Error parsing {name}: {exc}", resource=name) from exc

    if root.tag != "configuration":
        raise ResourceLoadError(
            f"Bad configuration file {name}: top-level element is <{root.tag}>, "
            "expected <configuration>",
            resource=name,
        )

    properties: list[tuple[str, str]] = []
    for prop in root.iter("property"):
        key = prop.findtext("name")
        value = prop.findtext("value")
        if key is None or value is None:
            logger.debug("resource_property_skipped", resource=name, key=key)
            continue
        properties.append((key.strip(), value))

    return properties


def load_resource(resource: Resource) -> list[tuple[str, str]] | None:
    """Load the properties of a resource.

    Missing resources are not an error: they are skipped with a debug note and
    None is returned.
    """
    data = _read_resource(resource)
    if data is None:
        logger.debug(
            "resource_not_found",
            resource=resource.name,
            builtin=resource.is_builtin,
        )
        return None

    properties = parse_properties(data, resource.name)
    logger.debug(
        "resource_loaded",
        resource=resource.name,
        property_count=len(properties),
    )
    return properties
