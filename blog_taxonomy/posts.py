"""
posts.py — _posts 配下の記事を読み込んで Post のリストにする（Post Store）
フロントマターは yaml.safe_load で読む。壊れた記事はスキップして続行。
"""

import pathlib, re, sys, datetime
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

import yaml
from .config import SiteConfig

FM_RE = re.compile(r"^---\n(.*?)\n---\n?(.*)$", re.S)
DATE_IN_NAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.*)$")

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


@dataclass(frozen=True)
class Post:
    title: str
    url: str
    tags: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()
    date: Optional[datetime.datetime] = None
    path: Optional[pathlib.Path] = None


def parse_front_matter(txt: str) -> Tuple[Dict, str]:
    m = FM_RE.match(txt)
    if not m:
        return {}, txt
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError:
        return {}, txt
    if not isinstance(fm, dict):
        return {}, txt
    return fm, m.group(2)


def collect_terms(fm: Dict, plural: str, singular: str) -> Tuple[str, ...]:
    """tags: [a, b] / tags: "a b" / tag: a のどれでも拾う（順序維持・重複はそのまま）"""
    terms: List[str] = []
    for key in (plural, singular):
        v = fm.get(key)
        if v is None:
            continue
        if isinstance(v, str):
            # Jekyll と同じく文字列は空白区切り
            terms.extend(v.split())
            continue
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            terms.append(str(v))
            continue
        if isinstance(v, list):
            for t in v:
                if isinstance(t, str):
                    if t.strip():
                        terms.append(t.strip())
                elif isinstance(t, (int, float)) and not isinstance(t, bool):
                    terms.append(str(t))
    return tuple(terms)


def to_datetime(v, tz: datetime.tzinfo) -> Optional[datetime.datetime]:
    if isinstance(v, datetime.datetime):
        dt = v
    elif isinstance(v, datetime.date):
        dt = datetime.datetime(v.year, v.month, v.day)
    elif isinstance(v, str):
        dt = None
        for fmt in DATE_FORMATS:
            try:
                dt = datetime.datetime.strptime(v.strip(), fmt)
                break
            except ValueError:
                continue
        if dt is None:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt


def split_name(p: pathlib.Path) -> Tuple[Optional[datetime.date], str]:
    """2025-09-28-hello-world.md → (date(2025,9,28), 'hello-world')"""
    m = DATE_IN_NAME_RE.match(p.stem)
    if not m:
        return None, p.stem
    y, M, d, slug = m.groups()
    try:
        return datetime.date(int(y), int(M), int(d)), slug
    except ValueError:
        return None, p.stem


def titleize(slug: str) -> str:
    return " ".join(w.capitalize() for w in re.split(r"[-_\s]+", slug) if w)


def build_url(template: str, categories: Tuple[str, ...], dt: Optional[datetime.datetime],
              slug: str, baseurl: str = "") -> str:
    # Jekyll同様 :categories は小文字化・重複除去して / 連結（エスケープは quote 任せ）
    cats = []
    for c in categories:
        c = c.lower()
        if c not in cats:
            cats.append(c)
    parts = {
        ":categories": "/".join(cats),
        ":year":  f"{dt:%Y}" if dt else "",
        ":month": f"{dt:%m}" if dt else "",
        ":day":   f"{dt:%d}" if dt else "",
        ":title": slug,
        ":output_ext": ".html",
    }
    url = template
    # 長いキーから置換
    for key in sorted(parts, key=len, reverse=True):
        url = url.replace(key, parts[key])
    url = re.sub(r"/{2,}", "/", "/" + url)
    return baseurl + quote(url, safe="/.-_~")


def post_from_text(p: pathlib.Path, txt: str, config: SiteConfig,
                   now: Optional[datetime.datetime] = None) -> Optional[Post]:
    fm, _body = parse_front_matter(txt)
    if fm.get("published") is False:
        return None

    name_date, slug = split_name(p)
    dt = to_datetime(fm.get("date"), config.tz) or to_datetime(name_date, config.tz)
    if dt is not None:
        # URL の年月日はサイトのタイムゾーン基準
        dt = dt.astimezone(config.tz)
        # 未来日付は future: true の時だけ
        if not config.future and dt > (now or datetime.datetime.now(datetime.timezone.utc)):
            return None
    slug = str(fm.get("slug") or slug)

    tags = collect_terms(fm, "tags", "tag")
    cats = collect_terms(fm, "categories", "category")

    title = fm.get("title")
    title = titleize(slug) if title is None else str(title)

    permalink = fm.get("permalink")
    if permalink:
        url = config.baseurl + str(permalink)
    else:
        url = build_url(config.permalink_template, cats, dt, slug, config.baseurl)

    return Post(title=title, url=url, tags=tags, categories=cats, date=dt, path=p)


def find_posts(posts_dir: pathlib.Path) -> List[pathlib.Path]:
    return sorted(list(posts_dir.glob("*.md")) + list(posts_dir.glob("*.markdown")))


def load_posts(posts_dir: pathlib.Path, config: Optional[SiteConfig] = None,
               now: Optional[datetime.datetime] = None) -> List[Post]:
    config = config or SiteConfig()
    posts: List[Post] = []
    owners: Dict[str, pathlib.Path] = {}
    for p in find_posts(posts_dir):
        try:
            txt = p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"  !! 読み込み失敗: {p}  {e}", file=sys.stderr)
            continue
        post = post_from_text(p, txt, config, now)
        if post is None:
            continue
        if post.url in owners:
            # 同じURLに複数記事（Jekyll の Conflict と同じ状況）。一覧では先の記事だけ残る
            print(f"  !! Conflict: {post.url} <- {owners[post.url].name}, {p.name}", file=sys.stderr)
        else:
            owners[post.url] = p
        posts.append(post)
    return posts
