from __future__ import annotations

import pytest

from hackernews.models import RECORD_KEYS, Post, PostFilter


def test_domain_strips_www_prefix():
    assert Post(url="https://www.example.com/a").domain == "example.com"


def test_domain_without_prefix_is_unchanged():
    assert Post(url="https://example.com/a").domain == "example.com"


def test_domain_without_url_is_empty():
    assert Post().domain == ""
    assert Post(url="item?id=1").domain == ""


def test_equality_uses_post_id_only():
    a = Post(post_id="8044029", title="one", points=3)
    b = Post(post_id="8044029", title="two", points=99)
    assert a == b


def test_different_post_ids_are_not_equal():
    assert Post(post_id="1") != Post(post_id="2")


def test_missing_post_ids_are_never_equal():
    assert Post() != Post()
    assert Post(post_id="1") != Post()
    assert Post() != Post(post_id="1")


def test_post_is_unhashable():
    with pytest.raises(TypeError):
        hash(Post(post_id="1"))


def test_post_filter_values_are_listing_paths():
    assert PostFilter.TOP.value == ""
    assert PostFilter.NEW.value == "newest"
    assert PostFilter("show") is PostFilter.SHOW


def test_to_record_omits_missing_values():
    record = Post(title="Hello", post_id="42").to_record()
    assert record == {"title": "Hello", "points": 0, "commentsCount": 0, "postId": "42"}


def test_record_round_trip_keeps_serialized_fields():
    post = Post(
        title="Show HN: a thing",
        username="pg",
        url="https://example.com/thing",
        points=57,
        comments_count=12,
        post_id="8044029",
        pretty_time="2 hours ago",
        upvote_url="vote?for=8044029&dir=up",
    )
    record = post.to_record()
    assert set(record) == set(RECORD_KEYS)

    decoded = Post.from_record(record)
    for attr in (
        "title",
        "username",
        "url",
        "points",
        "comments_count",
        "post_id",
        "pretty_time",
        "upvote_url",
    ):
        assert getattr(decoded, attr) == getattr(post, attr)


def test_from_record_leaves_absent_keys_at_defaults():
    post = Post.from_record({"title": "Only a title", "unknown": "ignored"})
    assert post.title == "Only a title"
    assert post.username is None
    assert post.points == 0
    assert post.comments_count == 0
    assert post.post_id is None


def test_from_record_coerces_counts():
    post = Post.from_record({"points": "12", "commentsCount": -4})
    assert post.points == 12
    assert post.comments_count == 0


def test_domain_of_malformed_url_is_empty():
    post = Post.from_record({"url": "http://[oops/path"})
    assert post.domain == ""
