"""
render.py — TaxonomyMap → HTML断片（tags.html / categories.html の本文）

  <h3 id="swiftui">swiftui</h3>
  <ul>
    <li><a href="/p1">タイトル</a></li>
  </ul>

空のマップなら空文字。タイトル/URLが空でもそのまま出す（落とさない）。
"""

import html
from typing import Dict, List

from slugify import slugify

from .indexer import TaxonomyMap


def anchor_ids(terms) -> Dict[str, str]:
    """用語 → 見出しの id。slug が衝突したら -2, -3 … を付ける"""
    ids: Dict[str, str] = {}
    used = set()
    for term in terms:
        base = slugify(term, allow_unicode=True) or "term"
        aid, i = base, 2
        while aid in used:
            aid = f"{base}-{i}"
            i += 1
        used.add(aid)
        ids[term] = aid
    return ids


def render(taxonomy_map: TaxonomyMap) -> str:
    if not taxonomy_map:
        return ""
    ids = anchor_ids(taxonomy_map)
    lines: List[str] = []
    for term, posts in taxonomy_map.items():
        lines.append(f'<h3 id="{html.escape(ids[term], quote=True)}">{html.escape(term)}</h3>')
        lines.append("<ul>")
        for post in posts:
            href  = html.escape(post.url or "", quote=True)
            title = html.escape(post.title or "")
            lines.append(f'  <li><a href="{href}">{title}</a></li>')
        lines.append("</ul>")
    return "\n".join(lines) + "\n"
