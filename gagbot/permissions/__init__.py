from .manager import PermissionManager
from .resolver import (
    PermissionState,
    PermissionTable,
    is_valid_node,
    resolve,
    wildcard_search_path,
)

__all__ = [
    "PermissionManager",
    "PermissionState",
    "PermissionTable",
    "is_valid_node",
    "resolve",
    "wildcard_search_path",
]
