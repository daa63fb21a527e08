import pathlib, sys
from typing import Dict, Optional

import yaml

from .config import INDEX_PAGES, TERM_PAGES


def front_matter_text(fm: Dict) -> str:
    txt = yaml.safe_dump(fm, allow_unicode=True, sort_keys=False, default_flow_style=False, width=1000)
    return f"---\n{txt}---\n"


def page_text(dimension: str, fragment: str) -> str:
    """tags.html / categories.html の中身（フロントマター + 描画済みHTML）"""
    spec = INDEX_PAGES[dimension]
    fm = {
        "layout": spec["layout"],
        "title": spec["title"],
        "permalink": spec["permalink"],
    }
    return front_matter_text(fm) + "\n" + fragment


def write_page(path: pathlib.Path, text: str, apply: bool = False) -> str:
    """戻り値: created / updated / unchanged。apply=False なら書かずに判定だけ"""
    if path.exists():
        try:
            same = path.read_text(encoding="utf-8") == text
        except UnicodeDecodeError:
            # UTF-8 で読めない既存ファイルは作り直す
            same = False
        if same:
            return "unchanged"
        status = "updated"
    else:
        status = "created"
    if apply:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(path)
        finally:
            if tmp.exists():
                tmp.unlink()
    return status


def term_page_name(term: str) -> str:
    # 日本語名をそのまま使う。/ だけは潰す
    return term.replace("/", "-")


def term_page_path(root: pathlib.Path, dimension: str, term: str) -> pathlib.Path:
    return root / TERM_PAGES[dimension]["dir"] / f"{term_page_name(term)}.md"


def ensure_term_page(root: pathlib.Path, dimension: str, term: str, apply: bool = False) -> Optional[pathlib.Path]:
    """個別ページが無ければ作る。既にあれば None（上書きしない）"""
    spec = TERM_PAGES[dimension]
    f = term_page_path(root, dimension, term)
    if f.exists():
        return None
    fm = {
        "layout": spec["layout"],
        "title": term,
        "permalink": f"/{spec['dir']}/{term_page_name(term)}/",
        spec["key"]: term,
    }
    if apply:
        try:
            f.parent.mkdir(parents=True, exist_ok=True)
            f.write_text(front_matter_text(fm), encoding="utf-8")
        except OSError as e:
            print(f"  !! 作成失敗: {f}  {e}", file=sys.stderr)
            return None
    return f
