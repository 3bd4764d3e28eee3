"""Render the structure of an `NGramTrie` to an image.

The graph is built from the trie's public read interface only
(`root`, `walk`, `count`), then handed to Graphviz `dot` as DOT text.
"""

import logging
import shutil
import subprocess
from pathlib import Path

import networkx as nx

from .n_gram_trie import NGramTrie

logger = logging.getLogger(__name__)

ROOT_LABEL = "root"
DEFAULT_FORMAT = "png"


class RenderError(RuntimeError):
    """Raised when the external layout tool is missing or fails."""


def build_graph(trie: NGramTrie) -> nx.DiGraph:
    """Create a directed graph with one node per trie node.

    Nodes at full n-gram depth are labeled `"<token> (<count>)"`,
    the others with their token only.
    """
    graph = nx.DiGraph()
    graph.add_node(trie.root, label=ROOT_LABEL, count=trie.count(trie.root), depth=0)
    for parent, token, child, depth in trie.walk():
        count = trie.count(child)
        label = f"{token} ({count})" if depth == trie.length else str(token)
        graph.add_node(child, label=label, count=count, depth=depth)
        graph.add_edge(parent, child)
    return graph


def to_dot(graph: nx.DiGraph, name: str = "ngram_trie") -> str:
    """Serialise a graph built by `build_graph` as Graphviz DOT text."""
    dot_graph = nx.nx_pydot.to_pydot(graph)
    dot_graph.set_name(name)
    return dot_graph.to_string()


def render(
    trie: NGramTrie,
    path: str | Path,
    fmt: str | None = None,
    dot_binary: str = "dot",
) -> Path:
    """Rasterise the trie structure to `path` with Graphviz.

    The output format defaults to the file suffix, or png without one.
    """
    path = Path(path)
    fmt = fmt or path.suffix.lstrip(".") or DEFAULT_FORMAT

    executable = shutil.which(dot_binary)
    if executable is None:
        raise RenderError(f"Graphviz executable {dot_binary!r} not found on PATH")

    dot_source = to_dot(build_graph(trie))
    logger.debug("Rendering %d bytes of DOT to %s as %s", len(dot_source), path, fmt)
    try:
        result = subprocess.run(
            [executable, f"-T{fmt}", "-o", str(path)],
            input=dot_source,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise RenderError(f"Failed to run {executable}: {e}") from e
    if result.returncode != 0:
        raise RenderError(
            f"{dot_binary} exited with status {result.returncode}: {result.stderr.strip()}"
        )
    logger.info("Wrote trie image to %s", path)
    return path
