"""Key-path helpers for the keyed record tree.

A tree is a nested ``dict`` whose leaves are JSON scalars. Paths are
slash-separated segments (``"pricing/monthly/-Nx1/order"``). Writing ``None``
removes a node and empty mappings are pruned, so an absent subtree and an
empty one look the same to readers.
"""

import copy
from typing import Any

RawTree = dict[str, Any]


def split_path(path: str) -> list[str]:
    """Split a key path into its non-empty segments."""
    return [segment for segment in path.strip("/").split("/") if segment]


def join_path(*parts: str) -> str:
    """Join path fragments, tolerating stray slashes."""
    segments: list[str] = []
    for part in parts:
        segments.extend(split_path(part))
    return "/".join(segments)


def paths_overlap(a: str, b: str) -> bool:
    """True when one path is an ancestor of (or equal to) the other."""
    sa, sb = split_path(a), split_path(b)
    shortest = min(len(sa), len(sb))
    return sa[:shortest] == sb[:shortest]


def get_in(tree: RawTree | None, segments: list[str]) -> Any:
    """Return a deep copy of the node at ``segments`` or ``None`` when absent."""
    node: Any = tree
    for segment in segments:
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return copy.deepcopy(node)


def set_in(tree: RawTree, segments: list[str], value: Any) -> RawTree:
    """Write ``value`` at ``segments`` in place and return the tree.

    ``segments`` must be non-empty; replacing the root is the caller's job.
    Intermediate scalars are overwritten by mappings, matching last-write-wins.
    """
    if not segments:
        raise ValueError("set_in requires at least one path segment")

    if value is None:
        _delete_in(tree, segments)
        return tree

    node = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = prune(copy.deepcopy(value))
    if node[segments[-1]] is None:
        _delete_in(tree, segments)
    return tree


def _delete_in(tree: RawTree, segments: list[str]) -> None:
    trail: list[tuple[dict, str]] = []
    node: Any = tree
    for segment in segments:
        if not isinstance(node, dict) or segment not in node:
            return
        trail.append((node, segment))
        node = node[segment]

    parent, key = trail.pop()
    del parent[key]
    # Drop ancestors left empty by the removal.
    while trail and not parent:
        parent, key = trail.pop()
        del parent[key]


def prune(value: Any) -> Any:
    """Remove ``None`` leaves and empty mappings; return ``None`` if nothing remains."""
    if isinstance(value, dict):
        cleaned = {}
        for key, child in value.items():
            pruned = prune(child)
            if pruned is not None:
                cleaned[str(key)] = pruned
        return cleaned or None
    return value


def sorted_tree(value: Any) -> Any:
    """Return a copy with every mapping's children ordered by key."""
    if isinstance(value, dict):
        return {key: sorted_tree(value[key]) for key in sorted(value)}
    return copy.deepcopy(value)


def record_children(value: Any) -> list[tuple[str, RawTree]]:
    """``(key, record)`` pairs of a keyed subtree; non-mapping children are skipped."""
    if not isinstance(value, dict):
        return []
    return [(key, child) for key, child in value.items() if isinstance(child, dict)]
