"""
Localization helpers for translating opaque identifiers via a locale catalog.
"""

from typing import Any


def resolve_localized_name(catalog: Any, path_id: str) -> str:
    """Look up a slash-delimited identifier in a locale catalog

    Examples:
        resolve_localized_name({"area": {"name": "Splat Zones"}}, "area") -> "Splat Zones"
        resolve_localized_name({"rules": {"area": "Zones"}}, "rules/area") -> "Zones"
        resolve_localized_name({}, "area") -> "area"

    Args:
        catalog: Nested mapping of path segments to mappings or leaves
        path_id: Identifier such as ``"stages/101"``

    Returns:
        The leaf's ``name`` (or the leaf itself when it is a primitive),
        otherwise ``path_id`` unchanged
    """
    current = catalog
    for segment in path_id.split('/'):
        if not isinstance(current, dict) or segment not in current:
            return path_id
        current = current[segment]

    if isinstance(current, dict):
        name = current.get('name')
        if name is None or name == '' or isinstance(name, (dict, list)):
            return path_id
        return str(name)

    if current is None or current == '' or isinstance(current, list):
        return path_id
    return str(current)


class LocalizationResolver:
    """Bind a locale catalog for repeated lookups"""

    def __init__(self, catalog: Any):
        self.catalog = catalog

    def resolve(self, path_id: str) -> str:
        return resolve_localized_name(self.catalog, path_id)
