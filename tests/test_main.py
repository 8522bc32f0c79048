import io
import sys

import pytest

from errors import ExitStatus
from main import run


@pytest.fixture
def corpus(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("the cat sat on the mat and the hat sat on the cat", encoding="utf-8")
    return path


def invoke(*argv):
    stdout, stderr = io.StringIO(), io.StringIO()
    status = run([str(arg) for arg in argv], stdout=stdout, stderr=stderr)
    return status, stdout.getvalue(), stderr.getvalue()


def test_success(corpus):
    status, out, _ = invoke(2, 40, corpus, "--seed", 5)
    assert status == ExitStatus.SUCCESS
    assert out.endswith("\n")
    assert len(out) == 41


def test_seed_makes_output_repeatable(corpus):
    first = invoke(3, 60, corpus, "--seed", 11)
    second = invoke(3, 60, corpus, "--seed", 11)
    assert first[1] == second[1]


def test_seed_from_environment(corpus, monkeypatch):
    monkeypatch.setenv("RANDOM_WRITER_SEED", "3")
    assert invoke(2, 50, corpus)[1] == invoke(2, 50, corpus)[1]


def test_forced_output(tmp_path):
    path = tmp_path / "ab.txt"
    path.write_text("ababab", encoding="utf-8")
    status, out, _ = invoke(2, 6, path, "--seed", 0)
    assert status == ExitStatus.SUCCESS
    assert out in ("ababab\n", "bababa\n")


def test_multiple_sources(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("aaaa", encoding="utf-8")
    second.write_text("bbbb", encoding="utf-8")
    status, out, _ = invoke(1, 10, first, second, "--seed", 1)
    assert status == ExitStatus.SUCCESS
    assert out.strip() in ("a" * 10, "b" * 10)


@pytest.mark.parametrize("argv", [
    ["x", "10", "CORPUS"],
    ["2", "ten", "CORPUS"],
    ["2", "10"],
    ["0", "10", "CORPUS"],
    ["2", "-1", "CORPUS"],
])
def test_invalid_arguments(corpus, argv):
    status, out, _ = invoke(*[corpus if arg == "CORPUS" else arg for arg in argv])
    assert status == ExitStatus.INVALID_ARGUMENTS
    assert out == ""


def test_missing_source(tmp_path):
    status, _, _ = invoke(2, 10, tmp_path / "missing.txt")
    assert status == ExitStatus.INVALID_ARGUMENTS


def test_bad_log_level(corpus):
    status, _, _ = invoke(2, 10, corpus, "--log-level", "loud")
    assert status == ExitStatus.INVALID_ARGUMENTS


def test_short_source(corpus, tmp_path):
    short = tmp_path / "short.txt"
    short.write_text("ab", encoding="utf-8")
    status, out, _ = invoke(3, 10, corpus, short)
    assert status == ExitStatus.INSUFFICIENT_CHARACTERS
    assert out == ""


def test_generation_gap_keeps_partial_output(tmp_path):
    path = tmp_path / "abc.txt"
    path.write_text("abc", encoding="utf-8")
    status, out, _ = invoke(2, 10, path)
    assert status == ExitStatus.INSUFFICIENT_CHARACTERS
    assert out == "abc"


def test_empty_model(tmp_path):
    path = tmp_path / "ab.txt"
    path.write_text("ab", encoding="utf-8")
    status, out, _ = invoke(2, 10, path)
    assert status == ExitStatus.INSUFFICIENT_CHARACTERS
    assert out == ""


def test_stats_and_plot(corpus, tmp_path):
    plot = tmp_path / "seed.png"
    status, out, err = invoke(2, 20, corpus, "--seed", 2, "--stats", "--plot", plot)
    assert status == ExitStatus.SUCCESS
    assert "АНАЛИЗ МОДЕЛИ МАРКОВА" in err
    assert len(out) == 21
    assert plot.exists()


def test_undecodable_source_with_strict_errors(tmp_path, monkeypatch):
    path = tmp_path / "broken.txt"
    path.write_bytes(b"abc\xff\xfeabcabc")
    monkeypatch.setenv("RANDOM_WRITER_ENCODING_ERRORS", "strict")
    status, out, _ = invoke(2, 10, path, "--seed", 1)
    assert status == ExitStatus.INVALID_ARGUMENTS
    assert out == ""


def test_plot_into_missing_directory(corpus, tmp_path):
    status, out, _ = invoke(2, 10, corpus, "--seed", 1, "--plot", tmp_path / "no" / "dir" / "x.png")
    assert status == ExitStatus.INVALID_ARGUMENTS
    assert out == ""


def test_analysis_not_loaded_without_stats_or_plot(corpus, monkeypatch):
    monkeypatch.delitem(sys.modules, "analyze_model", raising=False)
    status, _, _ = invoke(2, 10, corpus, "--seed", 1)
    assert status == ExitStatus.SUCCESS
    assert "analyze_model" not in sys.modules
