"""Reachability queries over the drawn-segment graph."""

from __future__ import annotations

from typing import AbstractSet, Mapping, Set


Connections = Mapping[int, AbstractSet[int]]


def would_create_cycle(origin: int, target: int, connections: Connections) -> bool:
    """True when ``target`` is already reachable from ``origin``.

    Joining the two would then close a loop.
    """

    visited: Set[int] = set()
    stack = [origin]
    while stack:
        current = stack.pop()
        if current == target:
            return True
        if current in visited:
            continue
        visited.add(current)
        for neighbor in connections.get(current, ()):
            if neighbor not in visited:
                stack.append(neighbor)
    return False


def is_forest(connections: Connections) -> bool:
    """Check that an undirected adjacency table contains no cycle."""

    visited: Set[int] = set()
    for root in connections:
        if root in visited:
            continue
        # (node, parent) pairs
        stack = [(root, None)]
        while stack:
            node, parent = stack.pop()
            if node in visited:
                return False
            visited.add(node)
            for neighbor in connections.get(node, ()):
                if neighbor != parent:
                    stack.append((neighbor, node))
    return True
