"""Tests du score de similarité"""

import pytest

from ecoscore.services.similarity import (
    NEUTRAL_SIMILARITY,
    calculate_similarity,
    category_similarity,
    eco_score_similarity,
    parse_price,
    price_similarity,
)
from ecoscore.tests.conftest import make_record


@pytest.fixture
def reference():
    return make_record("111", eco_score=40, price="5.00", category="snacks,chips")


def test_close_candidate_scores_high(reference):
    candidate = make_record("222", eco_score=80, price="5.50", category="snacks,crackers")

    assert eco_score_similarity(reference, candidate) == pytest.approx(0.6)
    assert price_similarity(reference, candidate) == pytest.approx(5.00 / 5.50)
    assert category_similarity(reference, candidate) == 1.0
    assert calculate_similarity(reference, candidate) == pytest.approx(0.8036, abs=1e-3)


def test_distant_candidate_scores_low(reference):
    candidate = make_record("333", eco_score=20, price="50.00", category="drinks")

    assert eco_score_similarity(reference, candidate) == pytest.approx(0.8)
    assert price_similarity(reference, candidate) == pytest.approx(0.1)
    assert category_similarity(reference, candidate) == NEUTRAL_SIMILARITY
    assert calculate_similarity(reference, candidate) == pytest.approx(0.46)


def test_eco_and_price_terms_are_symmetric(reference):
    candidate = make_record("222", eco_score=80, price="5.50", category="snacks")

    assert eco_score_similarity(reference, candidate) == eco_score_similarity(
        candidate, reference
    )
    assert price_similarity(reference, candidate) == price_similarity(
        candidate, reference
    )


def test_category_term_is_directional():
    broad = make_record("1", category="snacks")
    narrow = make_record("2", category="snacks,chips")

    assert category_similarity(narrow, broad) == 1.0
    assert category_similarity(broad, narrow) == 1.0
    assert category_similarity(broad, make_record("3", category="chips,snacks")) == (
        NEUTRAL_SIMILARITY
    )
    assert category_similarity(make_record("4", category="chips,snacks"), broad) == 1.0


def test_missing_data_is_neutral():
    bare = make_record("1", eco_score=50)
    other = make_record("2", eco_score=50)

    assert price_similarity(bare, other) == NEUTRAL_SIMILARITY
    assert category_similarity(bare, other) == NEUTRAL_SIMILARITY
    assert calculate_similarity(bare, other) == pytest.approx(0.4 + 0.2 + 0.1)


def test_unparseable_or_zero_price_is_neutral(reference):
    assert price_similarity(reference, make_record("2", price="free")) == NEUTRAL_SIMILARITY
    assert price_similarity(reference, make_record("2", price="0.00")) == NEUTRAL_SIMILARITY


def test_missing_eco_score_compares_as_default():
    reference = make_record("1", eco_score=50)
    candidate = make_record("2", eco_score=50).model_copy(update={"eco_score": None})

    assert eco_score_similarity(reference, candidate) == 1.0


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5.00", 5.0),
        ("3,99 €", 3.99),
        ("EUR 12", 12.0),
        ("approx. 1.5 kg for 7.20", 1.5),
        ("", None),
        (None, None),
        ("n/a", None),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


@pytest.mark.parametrize("ref_score", [0, 37, 100])
@pytest.mark.parametrize("cand_score", [0, 64, 100])
@pytest.mark.parametrize("price", [None, "0.01", "999.99"])
@pytest.mark.parametrize("category", [None, "drinks", "snacks,chips"])
def test_similarity_is_bounded(ref_score, cand_score, price, category):
    reference = make_record("1", eco_score=ref_score, price="5.00", category="snacks")
    candidate = make_record("2", eco_score=cand_score, price=price, category=category)

    assert 0.0 <= calculate_similarity(reference, candidate) <= 1.0
