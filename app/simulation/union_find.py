"""
simulation/union_find.py

Disjoint-set forest over integer indices, shared by net coloring and
net naming.
"""


class UnionFind:
    """Union-find with path halving; union points the second root at the first."""

    def __init__(self, size: int):
        self.parent = list(range(size))

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, index: int) -> int:
        cursor = index
        while self.parent[cursor] != cursor:
            self.parent[cursor] = self.parent[self.parent[cursor]]
            cursor = self.parent[cursor]
        return cursor

    def union(self, first: int, second: int) -> int:
        """Merge the sets of first and second. Returns the surviving root."""
        root_first = self.find(first)
        root_second = self.find(second)
        if root_first != root_second:
            self.parent[root_second] = root_first
        return root_first

    def connected(self, first: int, second: int) -> bool:
        return self.find(first) == self.find(second)

    def groups(self) -> dict[int, list[int]]:
        """Members of every set, keyed by root, in index order."""
        result: dict[int, list[int]] = {}
        for index in range(len(self.parent)):
            result.setdefault(self.find(index), []).append(index)
        return result
