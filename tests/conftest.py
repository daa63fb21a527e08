# Ensure the repo root is on sys.path so tests can import `blog_taxonomy` without requiring editable install
import os
import sys

import pytest

HERE = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(HERE, ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def write_post(posts_dir, name, front_matter, body="本文\n"):
    posts_dir.mkdir(parents=True, exist_ok=True)
    path = posts_dir / name
    path.write_text(f"---\n{front_matter.strip()}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path):
    """_posts に3本入った最小の Jekyll サイト"""
    posts = tmp_path / "_posts"
    write_post(posts, "2024-01-05-swiftui-intro.md", """
title: "SwiftUI Intro"
tags: [swiftui, ios]
categories: [iOS]
""")
    write_post(posts, "2024-02-10-eventkit-basics.md", """
title: "EventKit Basics"
tags: [eventkit, ios, ios]
categories: [iOS]
""")
    write_post(posts, "2024-03-01-tca-notes.md", """
title: "TCA Notes"
tags: [swiftui, architecture]
categories: [Architecture]
""")
    return tmp_path
