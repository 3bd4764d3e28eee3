import pytest

from ngram_counter import cli
from ngram_counter.utils.visualization import RenderError


def test_demo_prints_counts(capsys):
    assert cli.main(["demo"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Count for [1, 2, 3]: 2",
        "Count for [1, 2, 4]: 1",
        "Count for [2, 3, 4]: 1",
        "Count for [3, 4, 5]: 0",
    ]


def test_count_reads_token_file(tmp_path, capsys):
    path = tmp_path / "tokens.txt"
    path.write_text("1 2 3 1 2 3\n\n4 5\n", encoding="utf-8")

    assert cli.main(["count", "--input", str(path), "--n", "2"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Count for [1, 2]: 2",
        "Count for [2, 3]: 2",
        "Count for [3, 1]: 1",
        "Count for [4, 5]: 1",
    ]


def test_count_rejects_bad_n(tmp_path, capsys):
    path = tmp_path / "tokens.txt"
    path.write_text("1 2 3\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["count", "--input", str(path), "--n", "0"])
    assert exc_info.value.code == 2
    assert "--n must be a positive integer" in capsys.readouterr().err


def test_count_rejects_non_integer_token(tmp_path, capsys):
    path = tmp_path / "tokens.txt"
    path.write_text("1 2 x\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["count", "--input", str(path)])
    assert exc_info.value.code == 2
    assert "Invalid token" in capsys.readouterr().err


def test_demo_render(tmp_path, monkeypatch, capsys):
    rendered = []
    monkeypatch.setattr(cli, "render", lambda trie, path: rendered.append((trie, path)))

    out_path = str(tmp_path / "trie.png")
    assert cli.main(["demo", "--render", out_path]) == 0

    trie, path = rendered[0]
    assert path == out_path
    assert trie.search([1, 2, 3]) == 2
    assert f"Trie image saved to {out_path}" in capsys.readouterr().out


def test_demo_render_failure(tmp_path, monkeypatch, capsys):
    def failing_render(trie, path):
        raise RenderError("dot not found")

    monkeypatch.setattr(cli, "render", failing_render)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["demo", "--render", str(tmp_path / "trie.png")])
    assert exc_info.value.code == 1
    assert "Rendering failed: dot not found" in capsys.readouterr().err
