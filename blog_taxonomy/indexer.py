"""
indexer.py — 記事を tags / categories ごとにまとめる

- 用語（タグ名・カテゴリ名）は完全一致・大文字小文字区別
- 用語の並び: 文字列ソート順
- 用語内の記事: 新しい順（日付なしは末尾、同日時は入力順）
- 同じ記事が同じ用語に2回並ぶことはない（url で重複判定）
"""

import datetime
from typing import Dict, Iterable, List, Tuple

from .config import DIMENSIONS
from .posts import Post

TaxonomyMap = Dict[str, Tuple[Post, ...]]


def _sort_key(post) -> Tuple[int, float]:
    dt = getattr(post, "date", None)
    if dt is None:
        return (1, 0.0)
    if not isinstance(dt, datetime.datetime):
        dt = datetime.datetime(dt.year, dt.month, dt.day)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return (0, -dt.timestamp())


def build_index(posts: Iterable[Post], dimension: str) -> TaxonomyMap:
    if dimension not in DIMENSIONS:
        raise ValueError(f"unknown dimension: {dimension!r} (expected one of {DIMENSIONS})")

    groups: Dict[str, List] = {}
    seen: Dict[str, set] = {}
    for post in posts or ():
        for term in getattr(post, dimension, None) or ():
            urls = seen.setdefault(term, set())
            if post.url in urls:
                continue
            urls.add(post.url)
            groups.setdefault(term, []).append(post)

    # sorted は安定ソートなので同日時は入力順のまま
    return {term: tuple(sorted(groups[term], key=_sort_key)) for term in sorted(groups)}


def term_counts(index: TaxonomyMap) -> List[Tuple[str, int]]:
    return [(term, len(posts)) for term, posts in index.items()]
