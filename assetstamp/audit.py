import logging
import os
import re
from urllib.parse import unquote

from bs4 import BeautifulSoup

from .paths import is_external, strip_query
from .walk import rel_path, walk

SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*:", re.I)


def local_target(ref, page_path, dst_root):
    path = unquote(strip_query(ref).strip())
    if not path:
        return None
    if path.startswith("/"):
        return os.path.normpath(os.path.join(dst_root, path.lstrip("/")))
    return os.path.normpath(os.path.join(os.path.dirname(page_path), path))


def page_refs(html):
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all("script", src=True):
        yield tag["src"]
    for tag in soup.find_all("link", href=True):
        yield tag["href"]


def find_missing_refs(dst_root, html_ext=(".html",)):
    # logged and returned, never fatal
    missing = []
    for page in walk(dst_root, html_ext):
        with open(page, "r", encoding="utf-8", errors="ignore") as f:
            html = f.read()
        for ref in page_refs(html):
            ref = (ref or "").strip()
            if not ref or is_external(ref) or SCHEME_RE.match(ref):
                continue
            target = local_target(ref, page, dst_root)
            if target is None or os.path.exists(target):
                continue
            logging.warning(f"[MISS] {rel_path(dst_root, page)} references missing local file: {ref}")
            missing.append({"file": rel_path(dst_root, page), "ref": ref})
    return missing
