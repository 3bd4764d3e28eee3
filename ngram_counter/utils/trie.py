class TrieNode:
    """One prefix position of an n-gram trie.

    Children are stored as handles into the owning trie's node list,
    not as node objects.
    """

    __slots__ = ("count", "children")

    def __init__(self):
        self.count = 0
        self.children: dict[int, int] = {}

    def __repr__(self) -> str:
        return f"TrieNode(count={self.count}, children={len(self.children)})"
