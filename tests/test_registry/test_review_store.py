"""
Unit tests for the Review Store.
"""

import pytest
from dataclasses import replace

from insightify.data.seed import seed_reviews
from insightify.models.review import Language, Review
from insightify.registry.review_store import ReviewStore


@pytest.fixture
def store():
    return ReviewStore(seed_reviews())


def test_get_all_preserves_insertion_order(store):
    """Test reviews come back in seed order."""
    assert [r.review_id for r in store.get_all()] == ["1", "2", "3"]


def test_get_by_id(store):
    """Test lookup of known and unknown ids."""
    assert store.get_by_id("2").text == "Muy buen producto"
    assert store.get_by_id("missing") is None


def test_replace_all_overwrites(store):
    """Test replace_all drops previous records (no merge)."""
    store.replace_all([Review(review_id="9", text="Hola", lang=Language.SPANISH)])

    assert len(store) == 1
    assert "1" not in store
    assert store.get_by_id("9").text == "Hola"


def test_replace_all_duplicate_ids_last_wins():
    store = ReviewStore()
    store.replace_all([
        Review(review_id="1", text="first", lang=Language.ENGLISH),
        Review(review_id="1", text="second", lang=Language.ENGLISH),
    ])

    assert len(store) == 1
    assert store.get_by_id("1").text == "second"


def test_update_touches_only_target(store):
    """Test untouched records keep their identity after an update."""
    before = store.get_all()

    updated = store.update("2", lambda r: replace(r, response_time="5m"))

    after = store.get_all()
    assert updated.response_time == "5m"
    assert after[0] is before[0]
    assert after[2] is before[2]
    assert after[1] is not before[1]
    # Position is unchanged
    assert [r.review_id for r in after] == ["1", "2", "3"]


def test_update_unknown_id_is_noop(store):
    """Test update on an absent id leaves the store structurally equal."""
    before = [r.to_dict() for r in store.get_all()]

    result = store.update("missing", lambda r: replace(r, responded=True))

    assert result is None
    assert [r.to_dict() for r in store.get_all()] == before


def test_update_rejects_id_change(store):
    with pytest.raises(ValueError):
        store.update("1", lambda r: replace(r, review_id="other"))


def test_update_rejects_responded_revert(store):
    """Test a responded review cannot go back to not responded."""
    with pytest.raises(ValueError):
        store.update("2", lambda r: replace(r, responded=False))

    assert store.get_by_id("2").responded is True


def test_update_rejects_original_text_rewrite(store):
    """Test the captured original text is kept once set."""
    store.update("1", lambda r: replace(r, original_text=r.text, text="¡Excelente servicio!"))

    with pytest.raises(ValueError):
        store.update("1", lambda r: replace(r, original_text=r.text))

    assert store.get_by_id("1").original_text == "Great service!"


def test_replace_all_advances_generation(store):
    generation = store.generation

    store.replace_all(seed_reviews())

    assert store.generation == generation + 1


def test_filter_by_status(store):
    """Test the reviews tab filter."""
    assert [r.review_id for r in store.filter_by_status("responded")] == ["2"]
    assert [r.review_id for r in store.filter_by_status("not-responded")] == ["1", "3"]
    assert len(store.filter_by_status()) == 3

    with pytest.raises(ValueError):
        store.filter_by_status("pending")
