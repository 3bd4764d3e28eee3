import operator
from collections.abc import Iterable, Iterator, Sequence

from .trie import TrieNode

ROOT = 0


class LengthMismatchError(ValueError):
    """Raised when an n-gram does not have the trie's configured length."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "N-gram length must match the specified length: "
            f"expected {expected}, got {actual}"
        )


def _as_tokens(ngram: Iterable[int]) -> list[int]:
    """Convert integer tokens (including numpy integers) to ints.

    Floats, strings and other non-integer values raise `TypeError`.
    """
    return [operator.index(token) for token in ngram]


class NGramTrie:
    """Trie data structure to count n-grams of integer tokens.

    Every node on the path of an inserted n-gram is incremented, so the count
    at depth `d` is the number of inserted n-grams sharing that `d`-prefix.
    """

    def __init__(self, length: int):
        self._length = length
        self._nodes: list[TrieNode] = [TrieNode()]
        self._num_ngrams = 0

    @property
    def length(self) -> int:
        return self._length

    @property
    def root(self) -> int:
        return ROOT

    def _check_length(self, ngram: Sequence):
        if len(ngram) != self._length:
            raise LengthMismatchError(self._length, len(ngram))

    def insert(self, ngram: Sequence[int]):
        """Insert an n-gram into the trie."""
        self._check_length(ngram)
        tokens = _as_tokens(ngram)
        node = ROOT
        for token in tokens:
            child = self._nodes[node].children.get(token)
            if child is None:
                child = len(self._nodes)
                self._nodes[node].children[token] = child
                self._nodes.append(TrieNode())
            node = child
            self._nodes[node].count += 1
        if self._nodes[node].count == 1:
            self._num_ngrams += 1

    def search(self, ngram: Sequence[int]) -> int:
        """Get the count of an n-gram in the trie."""
        self._check_length(ngram)
        node = self._find(_as_tokens(ngram))
        return 0 if node is None else self._nodes[node].count

    def prefix_count(self, prefix: Sequence[int]) -> int:
        """Get the number of inserted n-grams starting with `prefix`.

        The empty prefix gives the total number of insertions.
        """
        if len(prefix) > self._length:
            raise LengthMismatchError(self._length, len(prefix))
        if len(prefix) == 0:
            return sum(self._nodes[child].count for _, child in self.children(ROOT))
        node = self._find(_as_tokens(prefix))
        return 0 if node is None else self._nodes[node].count

    def _find(self, tokens: list[int]) -> int | None:
        node = ROOT
        for token in tokens:
            node = self._nodes[node].children.get(token)
            if node is None:
                return None
        return node

    def count(self, node: int) -> int:
        return self._nodes[node].count

    def children(self, node: int) -> Iterator[tuple[int, int]]:
        return iter(list(self._nodes[node].children.items()))

    def walk(self) -> Iterator[tuple[int, int, int, int]]:
        """Depth-first traversal yielding `(parent, token, child, depth)` for every edge."""
        stack = [(ROOT, 0)]
        while stack:
            parent, depth = stack.pop()
            for token, child in self.children(parent):
                yield parent, token, child, depth + 1
                stack.append((child, depth + 1))

    def items(self) -> Iterator[tuple[tuple[int, ...], int]]:
        """Yield every stored n-gram with its count."""
        return self._iter_matches((None,) * self._length, frozenset())

    def __len__(self) -> int:
        return self._num_ngrams

    def get_matching_ngrams_with_count(
        self, pattern: Sequence[int | None], not_includes: Iterable[int] = ()
    ) -> dict[tuple[int, ...], int]:
        """Get all matching n-grams with their counts based on the given pattern.

        `None` in the pattern matches any token not in `not_includes`.
        """
        self._check_length(pattern)
        pattern = tuple(
            None if token is None else operator.index(token) for token in pattern
        )
        not_includes = set(_as_tokens(not_includes))
        if any(token in not_includes for token in pattern if token is not None):
            raise ValueError("Invalid not_includes tokens in the pattern")
        return dict(self._iter_matches(pattern, not_includes))

    def _iter_matches(
        self, pattern: tuple, not_includes: set | frozenset
    ) -> Iterator[tuple[tuple[int, ...], int]]:
        """Depth-first search to find matching n-grams.

        `current_ngram` holds the tokens from the root to the popped node.
        """
        current_ngram: list[int] = []
        stack = [(ROOT, 0, None)]
        while stack:
            node, depth, token = stack.pop()
            if depth:
                del current_ngram[depth - 1 :]
                current_ngram.append(token)
            if depth == self._length:
                yield tuple(current_ngram), self._nodes[node].count
                continue
            wanted = pattern[depth]
            if wanted is None:
                matching = [
                    (child_token, child)
                    for child_token, child in self.children(node)
                    if child_token not in not_includes
                ]
            else:
                child = self._nodes[node].children.get(wanted)
                matching = [] if child is None else [(wanted, child)]
            for child_token, child in reversed(matching):
                stack.append((child, depth + 1, child_token))
