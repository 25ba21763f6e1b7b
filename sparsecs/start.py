"""Strategies choosing the starting vertex of a Cuthill-McKee ordering."""

from __future__ import annotations

from collections.abc import Sequence

from .matrix import CsMat


def _first_unvisited(visited: Sequence[bool]) -> int:
    for vertex, seen in enumerate(visited):
        if not seen:
            return vertex
    raise ValueError("There should always be a unvisited vertex left to choose")


class Next:
    """Choose the first vertex that has not been visited yet."""

    def find_start_vertex(
        self, visited: Sequence[bool], degrees: Sequence[int], mat: CsMat
    ) -> int:
        return _first_unvisited(visited)


class MinimumDegree:
    """Choose an unvisited vertex of minimum degree (the first one on ties)."""

    def find_start_vertex(
        self, visited: Sequence[bool], degrees: Sequence[int], mat: CsMat
    ) -> int:
        candidates = [vertex for vertex, seen in enumerate(visited) if not seen]
        if not candidates:
            raise ValueError("There should always be a unvisited vertex left to choose")
        return min(candidates, key=lambda vertex: degrees[vertex])


class PseudoPeripheral:
    """Choose a pseudo-peripheral vertex with the George and Liu finder."""

    @staticmethod
    def _contender_and_height(
        root: int, degrees: Sequence[int], mat: CsMat
    ) -> tuple[int, int]:
        """Build the rooted level structure of ``root``.

        Returns the minimum-degree vertex of the last level and the number
        of levels.
        """
        visited = [False] * len(degrees)
        visited[root] = True
        levels = [[root]]
        while True:
            next_level = []
            for parent in levels[-1]:
                for neighbor in mat.outer_view(parent).indices:
                    if not visited[neighbor]:
                        visited[neighbor] = True
                        next_level.append(neighbor)
            if not next_level:
                break
            levels.append(next_level)
        contender = min(levels[-1], key=lambda vertex: degrees[vertex])
        return contender, len(levels)

    def find_start_vertex(
        self, visited: Sequence[bool], degrees: Sequence[int], mat: CsMat
    ) -> int:
        current = _first_unvisited(visited)
        # Isolated vertices are pseudo-peripheral by definition.
        if degrees[current] == 0:
            return current
        contender, current_height = self._contender_and_height(current, degrees, mat)
        # Terminates: the height must strictly increase for the loop to go on.
        while True:
            next_contender, contender_height = self._contender_and_height(
                contender, degrees, mat
            )
            if contender_height <= current_height:
                return current
            current_height = contender_height
            current = contender
            contender = next_contender