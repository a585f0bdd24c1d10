"""Application catalog loading.

The catalog is a YAML or JSON document (JSON parses as YAML) holding either a
list of application descriptors or a mapping with an ``apps`` list.
"""
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional

import yaml
from pydantic import ValidationError

from appstrap.core.errors import CatalogError
from appstrap.models.app import AppDescriptor

# Default catalog search paths, relative to the working directory
CATALOG_PATHS = ["apps.yml", "apps.yaml", "apps.json"]


def find_catalog(catalog_path: Optional[str] = None) -> Path:
    """Locate the catalog file.

    Order: explicit path, ``APPSTRAP_CATALOG``, then the default names in
    the working directory. The first default name is returned when nothing
    exists so the error message points somewhere sensible.
    """
    if catalog_path:
        return Path(catalog_path)

    env_catalog = os.environ.get("APPSTRAP_CATALOG")
    if env_catalog:
        return Path(env_catalog)

    for path in CATALOG_PATHS:
        if Path(path).exists():
            return Path(path)

    return Path(CATALOG_PATHS[0])


def _entries(data: Any) -> List[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get('apps'), list):
        return data['apps']
    raise CatalogError("Catalog must be a list of apps or a mapping with an 'apps' list")


def parse_catalog(data: Any, source: str = "<catalog>") -> List[AppDescriptor]:
    """Validate raw catalog data into descriptors.

    Raises:
        CatalogError: If the structure or any entry is invalid
    """
    apps = []
    for index, entry in enumerate(_entries(data)):
        if not isinstance(entry, dict):
            raise CatalogError(f"{source}: entry #{index + 1} is not a mapping")
        try:
            apps.append(AppDescriptor.model_validate(entry))
        except ValidationError as e:
            label = entry.get('name') or f"#{index + 1}"
            raise CatalogError(f"{source}: invalid app {label}: {e}") from e
    return apps


def load_catalog(path: Path) -> List[AppDescriptor]:
    """Read and validate the catalog file.

    Args:
        path: Catalog file location

    Returns:
        Descriptors in catalog order

    Raises:
        CatalogError: File missing, unreadable or malformed
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"Failed to parse catalog {path}: {e}") from e
    except OSError as e:
        raise CatalogError(f"Failed to read catalog {path}: {e}") from e

    if data is None:
        raise CatalogError(f"Catalog file is empty: {path}")

    return parse_catalog(data, source=str(path))


def select_apps(apps: Iterable[AppDescriptor], names: Optional[Iterable[str]]) -> List[AppDescriptor]:
    """Restrict ``apps`` to ``names`` (case-insensitive), keeping catalog order.

    Raises:
        CatalogError: If a requested name is not in the catalog
    """
    apps = list(apps)
    if not names:
        return apps

    wanted = {name.lower(): name for name in names}
    known = {app.name.lower() for app in apps}
    missing = [original for key, original in wanted.items() if key not in known]
    if missing:
        raise CatalogError(f"Unknown app(s) in catalog: {', '.join(missing)}")

    return [app for app in apps if app.name.lower() in wanted]
