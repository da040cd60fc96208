from __future__ import annotations

import random

import pytest

from hotel_catalog.hotels import RawReview, ReviewError
from hotel_catalog.index import ReviewIndex, review_sort_key


def _raw(
    review_id: str = "r1",
    *,
    hotel_id: str = "h1",
    rating: int = 4,
    submitted: str = "2016-06-29T17:50:37",
    username: str = "Sam",
) -> RawReview:
    return RawReview(
        hotel_id=hotel_id,
        review_id=review_id,
        rating=rating,
        title="Title",
        text="Text",
        recommended=True,
        submitted=submitted,
        username=username,
    )


def test_unknown_hotel_is_rejected_and_not_stored():
    index = ReviewIndex()
    outcome = index.add(_raw(), hotel_exists=False)

    assert not outcome
    assert outcome.error is ReviewError.UNKNOWN_HOTEL
    assert len(index) == 0
    assert list(index.reviews("h1")) == []


@pytest.mark.parametrize("rating", [0, 6, -1, 100])
def test_out_of_range_rating_is_rejected(rating):
    index = ReviewIndex()
    outcome = index.add(_raw(rating=rating), hotel_exists=True)

    assert outcome.error is ReviewError.INVALID_RATING
    assert len(index) == 0


@pytest.mark.parametrize("rating", [1, 5])
def test_boundary_ratings_are_accepted(rating):
    index = ReviewIndex()
    outcome = index.add(_raw(rating=rating), hotel_exists=True)

    assert outcome
    assert outcome.review.rating == rating
    assert len(index) == 1


@pytest.mark.parametrize(
    "submitted",
    ["", "yesterday", "2016-06-29", "2016/06/29T17:50:37", "2016-13-01T00:00:00", "2016-02-30T10:00:00"],
)
def test_unparseable_date_is_rejected(submitted):
    index = ReviewIndex()
    outcome = index.add(_raw(submitted=submitted), hotel_exists=True)

    assert outcome.error is ReviewError.INVALID_DATE
    assert index.count("h1") == 0


def test_unknown_hotel_is_checked_before_field_validation():
    index = ReviewIndex()
    outcome = index.add(_raw(rating=9, submitted="bad"), hotel_exists=False)
    assert outcome.error is ReviewError.UNKNOWN_HOTEL


def test_reviews_ordered_by_date_then_user_then_id():
    index = ReviewIndex()
    entries = [
        _raw("c", submitted="2014-09-05T05:00:45", username="Bob"),
        _raw("a", submitted="2014-09-05T05:00:45", username="Bob"),
        _raw("z", submitted="2014-09-05T05:00:45", username="Ann"),
        _raw("m", submitted="2015-01-01T00:00:00", username="Zed"),
        _raw("n", submitted="2013-01-01T00:00:00", username="Ann"),
    ]
    for raw in entries:
        assert index.add(raw, hotel_exists=True)

    assert [review.review_id for review in index.reviews("h1")] == ["m", "z", "a", "c", "n"]


def test_username_comparison_is_case_sensitive_code_point_order():
    index = ReviewIndex()
    index.add(_raw("1", username="alice"), hotel_exists=True)
    index.add(_raw("2", username="Bob"), hotel_exists=True)
    assert [review.username for review in index.reviews("h1")] == ["Bob", "alice"]


@pytest.mark.parametrize("seed", range(10))
def test_random_insertions_keep_composite_order(seed):
    rng = random.Random(seed)
    index = ReviewIndex()
    dates = ["2014-09-05T05:00:45", "2014-09-05T05:00:46", "2015-03-04T10:10:16", "2012-01-01T00:00:00"]
    users = ["Alicia", "Chris", "Xiaofeng", "alicia"]
    for number in range(60):
        index.add(
            _raw(
                f"id-{rng.randint(0, 9)}-{number}",
                hotel_id=rng.choice(["h1", "h2"]),
                submitted=rng.choice(dates),
                username=rng.choice(users),
                rating=rng.randint(1, 5),
            ),
            hotel_exists=True,
        )

    for hotel_id in ("h1", "h2"):
        reviews = list(index.reviews(hotel_id))
        for earlier, later in zip(reviews, reviews[1:]):
            assert earlier.submitted_at >= later.submitted_at
            assert review_sort_key(earlier) < review_sort_key(later)
            if earlier.submitted_at == later.submitted_at:
                assert earlier.username <= later.username
                if earlier.username == later.username:
                    assert earlier.review_id < later.review_id
    assert index.count("h1") + index.count("h2") == len(index) == 60


def test_reviews_are_kept_per_hotel():
    index = ReviewIndex()
    index.add(_raw("a", hotel_id="h1"), hotel_exists=True)
    index.add(_raw("b", hotel_id="h2"), hotel_exists=True)
    index.add(_raw("c", hotel_id="h2", username="Zoe"), hotel_exists=True)

    assert [review.review_id for review in index.reviews("h1")] == ["a"]
    assert [review.review_id for review in index.reviews("h2")] == ["b", "c"]


def test_duplicate_composite_key_keeps_first_review():
    index = ReviewIndex()
    first = _raw("same", rating=2)
    second = first._replace(rating=5, title="Second")

    assert index.add(first, hotel_exists=True)
    outcome = index.add(second, hotel_exists=True)

    assert outcome.error is ReviewError.DUPLICATE
    assert len(index) == 1
    stored = list(index.reviews("h1"))
    assert stored[0].rating == 2
    assert index.average_rating("h1") == 2.0


def test_keep_duplicates_stores_colliding_reviews_in_arrival_order():
    index = ReviewIndex(keep_duplicates=True)
    first = _raw("same", rating=2)
    second = first._replace(rating=5, title="Second")
    earlier = _raw("same", submitted="2010-01-01T00:00:00")

    assert index.add(first, hotel_exists=True)
    assert index.add(second, hotel_exists=True)
    assert index.add(earlier, hotel_exists=True)

    assert [review.rating for review in index.reviews("h1")] == [2, 5, 4]
    assert index.average_rating("h1") == pytest.approx(11 / 3)


def test_average_rating_sentinel_for_missing_hotel():
    index = ReviewIndex()
    assert index.average_rating("nobody") == 0.0
    assert list(index.reviews("nobody")) == []


def test_average_rating_mean():
    index = ReviewIndex()
    for review_id, rating in (("a", 5), ("b", 4), ("c", 4)):
        index.add(_raw(review_id, rating=rating), hotel_exists=True)
    assert index.average_rating("h1") == pytest.approx(13 / 3)


def test_reviews_view_is_live():
    index = ReviewIndex()
    index.add(_raw("a", submitted="2014-01-01T00:00:00"), hotel_exists=True)
    view = index.reviews("h1")
    index.add(_raw("b", submitted="2015-01-01T00:00:00"), hotel_exists=True)
    assert [review.review_id for review in view] == ["b", "a"]


def test_view_taken_before_first_review_sees_later_reviews():
    index = ReviewIndex()
    view = index.reviews("h1")
    assert list(view) == []

    index.add(_raw("a"), hotel_exists=True)
    index.add(_raw("b", submitted="2017-01-01T00:00:00"), hotel_exists=True)

    assert len(view) == 2
    assert [review.review_id for review in view] == ["b", "a"]
    assert view[0].review_id == "b"


def test_view_for_hotel_without_reviews_stays_empty_per_hotel():
    index = ReviewIndex()
    view = index.reviews("h1")
    index.add(_raw("x", hotel_id="h2"), hotel_exists=True)
    assert list(view) == []
