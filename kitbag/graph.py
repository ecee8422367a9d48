"""A graph of integer vertices with directed, oriented arcs.

Each arc carries a two-bit direction code. Adding an arc from ``u`` to ``v``
with code ``d`` also records the reverse arc from ``v`` to ``u`` with code
``~d & 3``, so both endpoints always see each other. Vertices and arcs carry
free-form attribute dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

ArcKey = Tuple[int, int]


def _reverse(direction: int) -> int:
    return ~direction & 3


def _check_vertex(v: int) -> None:
    if v < 0:
        raise ValueError(f"vertex id must be non-negative, not {v}")


@dataclass
class Vertex:
    """A vertex: its id, attributes and arcs keyed by ``(neighbor, direction)``."""

    id: int
    attrs: Dict[str, Any] = field(default_factory=dict)
    arcs: Dict[ArcKey, Dict[str, Any]] = field(default_factory=dict)


class Graph:
    """Vertices by id, each with a table of arcs to its neighbors."""

    def __init__(self) -> None:
        self._vertices: Dict[int, Vertex] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, v: int) -> bool:
        return v in self._vertices

    def __iter__(self) -> Iterator[int]:
        return iter(self._vertices)

    def get_vertex(self, v: int) -> Optional[Vertex]:
        """Return vertex ``v``, or None if absent."""
        return self._vertices.get(v)

    def put_vertex(self, v: int) -> Tuple[Vertex, bool]:
        """Return vertex ``v`` and whether it was just created."""
        _check_vertex(v)
        vertex = self._vertices.get(v)
        if vertex is not None:
            return vertex, False
        vertex = self._vertices[v] = Vertex(v)
        return vertex, True

    def put_arc(self, vbeg: int, vend: int, direction: int) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Add the arc ``vbeg -> vend`` with ``direction`` (0-3) and its reverse.

        Missing vertices are created. Returns the attribute dictionaries of
        the forward and the reverse arc.
        """
        if not 0 <= direction <= 3:
            raise ValueError(f"direction must be in 0..3, not {direction}")
        begin, _ = self.put_vertex(vbeg)
        forward = begin.arcs.setdefault((vend, direction), {})
        end, _ = self.put_vertex(vend)
        backward = end.arcs.setdefault((vbeg, _reverse(direction)), {})
        return forward, backward

    def del_vertex(self, v: int) -> Optional[Vertex]:
        """Remove vertex ``v`` and every arc touching it; return it, or None if absent."""
        vertex = self._vertices.get(v)
        if vertex is None:
            return None
        for neighbor, direction in list(vertex.arcs):
            other = self._vertices.get(neighbor)
            if other is not None:
                other.arcs.pop((v, _reverse(direction)), None)
        del self._vertices[v]
        return vertex

    def neighbors(self, v: int) -> List[ArcKey]:
        """Return the ``(neighbor, direction)`` pairs of vertex ``v``; KeyError if absent."""
        return list(self._vertices[v].arcs)

    def format_lines(self) -> List[str]:
        """Describe the graph as text lines.

        Each vertex gives ``v <id>``, followed by one ``a <u><c1><c2><w>`` line
        for each arc to a neighbor with a larger id, where ``c1`` and ``c2``
        are ``>`` or ``<`` for the high and low direction bits.
        """
        lines: List[str] = []
        for vid, vertex in self._vertices.items():
            lines.append(f"v {vid}")
            for neighbor, direction in vertex.arcs:
                if vid < neighbor:
                    high = "><"[direction >> 1 & 1]
                    low = "><"[direction & 1]
                    lines.append(f"a {vid}{high}{low}{neighbor}")
        return lines