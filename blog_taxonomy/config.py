import pathlib, sys, datetime
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

BASE   = pathlib.Path.cwd()
POSTS  = "_posts"
CONFIG = "_config.yml"

# 既定はJST（_config.yml の timezone で上書き可）
JST = datetime.timezone(datetime.timedelta(hours=9))

DIMENSIONS = ("tags", "categories")

# 一覧ページの置き場所と permalink
INDEX_PAGES = {
    "tags":       {"file": "tags.html",       "permalink": "/tags/",       "title": "Tags",       "layout": "page"},
    "categories": {"file": "categories.html", "permalink": "/categories/", "title": "Categories", "layout": "page"},
}

# タグ/カテゴリ個別ページ（sync_categories 方式）
TERM_PAGES = {
    "tags":       {"dir": "tags",       "layout": "tag",      "key": "tag"},
    "categories": {"dir": "categories", "layout": "category", "key": "category"},
}

PERMALINK_STYLES = {
    "date":   "/:categories/:year/:month/:day/:title:output_ext",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "none":   "/:categories/:title:output_ext",
}


@dataclass(frozen=True)
class SiteConfig:
    baseurl: str = ""
    permalink: str = "date"
    tz: datetime.tzinfo = JST
    future: bool = False

    @property
    def permalink_template(self) -> str:
        return PERMALINK_STYLES.get(self.permalink, self.permalink)


def load_timezone(name):
    """_config.yml の timezone（Asia/Tokyo など IANA 名）→ tzinfo。読めなければ None"""
    if not name: return None
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError):
        print(f"WARN: timezone {name!r} を解釈できません（+09:00 で続行）", file=sys.stderr)
        return None


def load_config(root: pathlib.Path) -> SiteConfig:
    path = root / CONFIG
    if not path.exists():
        return SiteConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"WARN: {path} を読めません（既定値で続行）: {e}", file=sys.stderr)
        return SiteConfig()
    if not isinstance(data, dict):
        return SiteConfig()

    baseurl = str(data.get("baseurl") or "").rstrip("/")
    permalink = str(data.get("permalink") or "date")
    tz = load_timezone(data.get("timezone")) or JST
    future = data.get("future") is True
    return SiteConfig(baseurl=baseurl, permalink=permalink, tz=tz, future=future)
