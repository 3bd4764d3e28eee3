"""Build n-gram tries from streams of integer tokens.

A token stream is any 1-D sequence of ints (a list, or a numpy array such as
the output of a tokenizer). Every contiguous window of length `n` in a stream
is one n-gram; windows never span two streams.
"""

import logging
from collections.abc import Iterable, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .n_gram_trie import NGramTrie

logger = logging.getLogger(__name__)

DEFAULT_MIN_N_GRAM = 2
DEFAULT_MAX_N_GRAM = 4


def extract_ngrams(tokens: Sequence[int], n: int) -> np.ndarray:
    """Get all contiguous n-grams of a token stream as rows of a 2-D array."""
    if n < 1:
        raise ValueError(f"n must be a positive integer, got {n}")
    tokens = np.asarray(tokens)
    if tokens.ndim != 1:
        raise ValueError(f"Token stream must be 1-D, got shape {tokens.shape}")
    if tokens.size == 0:
        tokens = tokens.astype(np.int64)
    elif not np.issubdtype(tokens.dtype, np.integer):
        raise TypeError(f"Token stream must hold integers, got dtype {tokens.dtype}")
    if len(tokens) < n:
        return np.empty((0, n), dtype=np.int64)
    return sliding_window_view(tokens, n)


def build_trie(token_streams: Iterable[Sequence[int]], n: int) -> NGramTrie:
    """Create an `NGramTrie` holding every n-gram of every stream."""
    trie = NGramTrie(n)
    num_streams = 0
    num_ngrams = 0
    for tokens in token_streams:
        ngrams = extract_ngrams(tokens, n)
        for ngram in ngrams:
            trie.insert(ngram)
        num_streams += 1
        num_ngrams += len(ngrams)
    logger.debug("Inserted %d %d-grams from %d streams", num_ngrams, n, num_streams)
    return trie


def build_n_gram_tries(
    token_streams: Iterable[Sequence[int]],
    min_n: int = DEFAULT_MIN_N_GRAM,
    max_n: int = DEFAULT_MAX_N_GRAM,
) -> dict[int, NGramTrie]:
    """Create a dictionary mapping n-gram lengths to their tries.

    Only n-grams of length `min_n` to `max_n` are considered.
    """
    if min_n < 1:
        raise ValueError(f"min_n must be a positive integer, got {min_n}")
    if min_n > max_n:
        raise ValueError(f"min_n ({min_n}) must not be greater than max_n ({max_n})")
    token_streams = [np.asarray(tokens) for tokens in token_streams]
    return {n: build_trie(token_streams, n) for n in range(min_n, max_n + 1)}
