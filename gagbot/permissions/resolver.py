"""Tri-state resolution of colon-delimited permission nodes.

A guild's permission table maps role ids to ``{node: allowed}`` entries. A
node such as ``gagbot:admin:prune`` is looked up exactly first, then with its
trailing segments replaced by a wildcard: ``gagbot:admin:*``, then
``gagbot:*``. The bare ``*`` is only ever matched by the node ``*`` itself.
"""

import re
from collections.abc import Mapping
from enum import Enum

WILDCARD = "*"
SEPARATOR = ":"

_NODE_PATTERN = re.compile(r"(\w+|\*)(:(\w+|\*))*")

PermissionTable = Mapping[str, Mapping[str, bool]]


class PermissionState(Enum):
    ALLOW = "allow"
    DENY = "deny"
    UNSET = "unset"


def is_valid_node(node: str) -> bool:
    return bool(_NODE_PATTERN.fullmatch(node))


def wildcard_search_path(node: str) -> list[str]:
    """Every search string tried for ``node``, most specific first."""
    path = [node]
    search = node
    while True:
        base = search[: -len(SEPARATOR + WILDCARD)] if search.endswith(SEPARATOR + WILDCARD) else search
        cut = base.rfind(SEPARATOR)
        if cut == -1:
            return path
        search = base[:cut] + SEPARATOR + WILDCARD
        path.append(search)


def resolve(table: PermissionTable, role_id: int | str, node: str) -> PermissionState:
    entries = table.get(str(role_id))
    if not entries:
        return PermissionState.UNSET

    for search in wildcard_search_path(node):
        if search in entries:
            return PermissionState.ALLOW if entries[search] else PermissionState.DENY

    return PermissionState.UNSET
