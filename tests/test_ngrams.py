from __future__ import annotations

import math
import pickle

import pytest

from subcracker.core.ngrams import (
    NgramScorer,
    count_ngrams,
    load_ngram_table,
    load_package_table,
    parse_ngram_lines,
    write_ngram_table,
)
from subcracker.core.scoring import get_quadgram_scorer, quadgram_score
from subcracker.core.utils import EnglishNormalizer


def test_english_normalizer():
    ep = EnglishNormalizer()

    assert ep("Hello, World!") == "helloworld"
    assert ep("Winter is CoMinG!") == "winteriscoming"
    assert ep('ABCD&7%4#$?,<>."\n~*^QWerTy') == "abcdqwerty"
    assert ep("ЙЦУКЕНQWERTY") == "qwerty"


def test_english_normalizer_is_idempotent():
    ep = EnglishNormalizer()
    text = "It's 9 o'clock -- Time to GO."
    assert ep(ep(text)) == ep(text)


def test_scorer_sums_count_times_weight():
    scorer = NgramScorer({"ab": 2.0, "bc": 5.0}, 2)
    # ab, bc, ca, ab, bc -> 2*2 + 2*5 + 0
    assert scorer("abcabc") == pytest.approx(14.0)


def test_scorer_floor_and_short_text():
    scorer = NgramScorer({"abc": 1.0}, 3, floor=-10.0)
    assert scorer("abcd") == pytest.approx(1.0 - 10.0)
    assert scorer("ab") == 0.0


def test_scorer_rejects_bad_tables():
    with pytest.raises(ValueError, match="empty"):
        NgramScorer({}, 4)
    with pytest.raises(ValueError, match=">= 1"):
        NgramScorer({"a": 1.0}, 0)
    with pytest.raises(ValueError, match="wrong length"):
        NgramScorer({"abc": 1.0, "abcd": 2.0}, 4)


def test_log_probability_from_counts():
    scorer = NgramScorer.log_probability({"ab": 3.0, "cd": 1.0}, 2)
    assert scorer.table["ab"] == pytest.approx(math.log10(0.75))
    assert scorer.table["cd"] == pytest.approx(math.log10(0.25))
    assert scorer.floor < scorer.table["cd"]
    assert scorer("ab") > scorer("cd") > scorer("zz")


def test_log_probability_keeps_log_tables():
    scorer = NgramScorer.log_probability({"ab": -1.0, "cd": -2.5}, 2)
    assert scorer.table == {"ab": -1.0, "cd": -2.5}
    assert scorer.floor == pytest.approx(-3.5)


def test_parse_ngram_lines_normalizes_tokens():
    table = parse_ngram_lines("TION 850\n\n  Ther\t12.5\n")
    assert table == {"tion": 850.0, "ther": 12.5}


@pytest.mark.parametrize("bad", ["tion\n", "tion abc\n", "1234 5\n"])
def test_parse_ngram_lines_reports_line(bad):
    with pytest.raises(ValueError, match=":1:"):
        parse_ngram_lines(bad)


def test_count_write_load_round_trip(tmp_path):
    table = count_ngrams("The cat, the hat.", 3)
    assert table["the"] == 2.0
    assert table["hat"] == 1.0

    path = tmp_path / "trigrams.txt"
    write_ngram_table(table, path)
    assert path.read_text(encoding="utf-8").splitlines()[0] == "the 2"
    assert load_ngram_table(path) == table


def test_from_file(tmp_path):
    path = tmp_path / "bigrams.txt"
    path.write_text("th 10\nhe 5\n", encoding="utf-8")
    raw = NgramScorer.from_file(path, 2, log=False)
    assert raw("the") == pytest.approx(15.0)
    assert NgramScorer.from_file(path, 2)("the") < 0


def test_package_quadgrams():
    table = load_package_table()
    assert all(len(g) == 4 for g in table)
    assert table["tion"] > table.get("qzxj", 0.0)


def test_cached_quadgram_scorer_prefers_english():
    scorer = get_quadgram_scorer()
    assert get_quadgram_scorer() is scorer
    ep = EnglishNormalizer()
    english = ep("The light on the rocks continued to shine every night.")
    scrambled = ep("Zit sustz gf zit kgeal egfzofxtr zg lioft tctkn fouiz.")
    assert quadgram_score(english) > quadgram_score(scrambled)


def test_scorer_and_normalizer_pickle():
    scorer = NgramScorer({"ab": 1.0}, 2)
    assert pickle.loads(pickle.dumps(scorer)) == scorer
    assert pickle.loads(pickle.dumps(EnglishNormalizer())) == EnglishNormalizer()
