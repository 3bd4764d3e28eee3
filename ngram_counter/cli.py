import argparse
import logging

from .utils.corpus import build_trie
from .utils.n_gram_trie import NGramTrie
from .utils.visualization import RenderError, render

DEFAULT_NGRAM_LEN = 3

DEMO_NGRAMS = [
    [1, 2, 3],
    [1, 2, 3],
    [1, 2, 4],
    [2, 3, 4],
]
DEMO_QUERIES = [
    [1, 2, 3],
    [1, 2, 4],
    [2, 3, 4],
    [3, 4, 5],
]


def _format_ngram(ngram) -> str:
    return "[" + ", ".join(str(int(token)) for token in ngram) + "]"


def run_demo() -> NGramTrie:
    trie = NGramTrie(DEFAULT_NGRAM_LEN)
    for ngram in DEMO_NGRAMS:
        trie.insert(ngram)
    for ngram in DEMO_QUERIES:
        print(f"Count for {_format_ngram(ngram)}: {trie.search(ngram)}")
    return trie


def run_count(input_path: str, n: int) -> NGramTrie:
    """Count n-grams of a token file, one whitespace-separated stream per line."""
    with open(input_path, "r", encoding="utf-8") as f:
        streams = [[int(token) for token in line.split()] for line in f if line.strip()]
    trie = build_trie(streams, n)
    for ngram, count in sorted(trie.items(), key=lambda item: (-item[1], item[0])):
        print(f"Count for {_format_ngram(ngram)}: {count}")
    return trie


def main(argv=None):
    parser = argparse.ArgumentParser(description="Count n-grams of integer tokens")
    parser.add_argument("--verbose", "-v", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    demo_p = sub.add_parser("demo", help="Insert sample n-grams and print counts")
    demo_p.add_argument("--render", help="Write an image of the trie to this path")

    count_p = sub.add_parser("count", help="Count n-grams of a token file")
    count_p.add_argument("--input", required=True, help="Path to token file")
    count_p.add_argument("--n", type=int, default=DEFAULT_NGRAM_LEN)
    count_p.add_argument("--render", help="Write an image of the trie to this path")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "demo":
        trie = run_demo()
    else:
        if args.n < 1:
            parser.error(f"--n must be a positive integer, got {args.n}")
        try:
            trie = run_count(args.input, args.n)
        except ValueError as e:
            parser.error(f"Invalid token in {args.input}: {e}")

    if args.render:
        try:
            render(trie, args.render)
        except RenderError as e:
            parser.exit(1, f"Rendering failed: {e}\n")
        print(f"Trie image saved to {args.render}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
