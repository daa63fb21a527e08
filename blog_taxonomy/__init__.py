from .indexer import TaxonomyMap, build_index, term_counts
from .posts import Post, load_posts
from .render import render

__all__ = ["Post", "TaxonomyMap", "build_index", "load_posts", "render", "term_counts"]
