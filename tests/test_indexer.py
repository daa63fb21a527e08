import datetime
from types import SimpleNamespace

import pytest

from blog_taxonomy.indexer import build_index, term_counts
from blog_taxonomy.posts import Post
from blog_taxonomy.render import render

JST = datetime.timezone(datetime.timedelta(hours=9))


def test_empty_store_gives_empty_map():
    assert build_index([], "tags") == {}
    assert build_index([], "categories") == {}


def test_scenario_two_posts_sharing_a_tag():
    a = Post(title="A", url="/a", tags=("x", "y"))
    b = Post(title="B", url="/b", tags=("x",))

    index = build_index([a, b], "tags")

    assert index == {"x": (a, b), "y": (a,)}


def test_keys_are_exactly_the_terms_in_use():
    posts = [
        Post(title="A", url="/a", tags=("swiftui",), categories=("iOS",)),
        Post(title="B", url="/b", tags=(), categories=("Architecture",)),
        Post(title="C", url="/c", tags=("combine", "swiftui")),
    ]
    tags = build_index(posts, "tags")
    cats = build_index(posts, "categories")

    assert set(tags) == {"swiftui", "combine"}
    assert set(cats) == {"iOS", "Architecture"}
    for term, members in tags.items():
        assert all(term in p.tags for p in members)


def test_duplicate_term_on_one_post_lists_it_once():
    p = Post(title="A", url="/a", tags=("ios", "ios", "ios"))
    assert build_index([p], "tags") == {"ios": (p,)}


def test_post_without_terms_contributes_nothing():
    tagged = Post(title="A", url="/a", tags=("x",))
    bare = Post(title="B", url="/b", tags=())

    index = build_index([tagged, bare], "tags")

    assert index == {"x": (tagged,)}
    assert "/b" not in render(index)


def test_object_missing_dimension_is_treated_as_empty():
    loose = SimpleNamespace(title="T", url="/t")
    assert build_index([loose], "categories") == {}


def test_terms_are_case_sensitive_and_sorted():
    posts = [Post(title="A", url="/a", tags=("swift", "Swift", "combine"))]
    assert list(build_index(posts, "tags")) == ["Swift", "combine", "swift"]


def test_posts_within_term_are_newest_first_undated_last():
    old = Post(title="old", url="/old", tags=("t",), date=datetime.datetime(2023, 1, 1, tzinfo=JST))
    new = Post(title="new", url="/new", tags=("t",), date=datetime.datetime(2024, 6, 1, tzinfo=JST))
    nodate = Post(title="nodate", url="/nodate", tags=("t",))

    index = build_index([nodate, old, new], "tags")

    assert [p.title for p in index["t"]] == ["new", "old", "nodate"]


def test_same_date_keeps_store_order():
    d = datetime.datetime(2024, 1, 1, tzinfo=JST)
    first = Post(title="1", url="/1", categories=("c",), date=d)
    second = Post(title="2", url="/2", categories=("c",), date=d)
    assert build_index([first, second], "categories")["c"] == (first, second)


def test_unknown_dimension_raises():
    with pytest.raises(ValueError):
        build_index([], "authors")


def test_term_counts_follow_map_order():
    posts = [
        Post(title="A", url="/a", tags=("x", "y")),
        Post(title="B", url="/b", tags=("x",)),
    ]
    assert term_counts(build_index(posts, "tags")) == [("x", 2), ("y", 1)]
