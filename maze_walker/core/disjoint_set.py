from array import array


class DisjointSet:
    """
    Union-find over dense integer ids (flat cell indices).
    find() compresses paths, union() attaches the lower-ranked root.
    """

    __slots__ = ('parent', 'rank', 'sets')

    def __init__(self, size: int):
        self.parent = array('l', range(size))
        self.rank = array('B', [0] * size)
        self.sets = size

    def find(self, item: int) -> int:
        root = item
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[item] != root:
            self.parent[item], item = root, self.parent[item]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merges the sets holding a and b. Returns False if they were already joined."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        self.sets -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)
