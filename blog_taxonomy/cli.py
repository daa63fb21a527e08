#!/usr/bin/env python3
"""
blog-taxonomy — _posts のタグ/カテゴリから tags.html / categories.html を作り直す
既定はドライラン（表示のみ）。--apply を付けると実際に書き込みます。

使い方:
  blog-taxonomy
  blog-taxonomy --apply                    # 実行
  blog-taxonomy --only categories --apply  # カテゴリ一覧だけ
  blog-taxonomy --term-pages --apply       # 個別ページ(categories/◯◯.md 等)も作る
"""

import argparse, pathlib, sys

from . import config as cfg
from .indexer import build_index, term_counts
from .pages import ensure_term_page, page_text, write_page
from .posts import load_posts
from .render import render


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="blog-taxonomy")
    ap.add_argument("--root", default=str(cfg.BASE), help="サイトのルート（_posts がある場所）")
    ap.add_argument("--apply", action="store_true", help="実行（実ファイル書き込み）")
    ap.add_argument("--only", choices=cfg.DIMENSIONS, default=None, help="片方の一覧だけ作る")
    ap.add_argument("--term-pages", action="store_true", help="タグ/カテゴリ個別ページも無ければ作る")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    root = pathlib.Path(args.root).resolve()
    posts_dir = root / cfg.POSTS

    if not posts_dir.exists():
        print(f"ERROR: {posts_dir} が見つかりません。サイトのルートで実行してください。", file=sys.stderr)
        sys.exit(1)

    site = cfg.load_config(root)
    posts = load_posts(posts_dir, site)
    print(f"posts: {len(posts)}")

    dimensions = (args.only,) if args.only else cfg.DIMENSIONS
    summary = {}
    for dim in dimensions:
        index = build_index(posts, dim)
        path = root / cfg.INDEX_PAGES[dim]["file"]
        status = write_page(path, page_text(dim, render(index)), apply=args.apply)
        print(f"{status:9} {path.name}  ({len(index)} terms)")
        summary[dim] = term_counts(index)

        if args.term_pages:
            for term in index:
                created = ensure_term_page(root, dim, term, apply=args.apply)
                if created:
                    print("created", created)

    print("\n--- SUMMARY ---")
    for dim, counts in summary.items():
        print(f"[{dim}]")
        for term, n in counts:
            print(f"  {term}: {n}")
    if not args.apply:
        print("※ ドライラン（--apply で実行）")
    return 0


if __name__ == "__main__":
    sys.exit(main())
