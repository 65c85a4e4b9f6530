import logging
import re

import htmlmin
import rcssmin
import rjsmin

from .config import HTMLMIN_OPTS, JS_SCRIPT_TYPES
from .errors import BuildError, MinifyError
from .rewrite import attr_value, stamp_css_urls, stamp_html
from .walk import ensure_parent

INLINE_RE = re.compile(r'(<(script|style)\b[^>]*>)(.*?)(</\2\s*>)', re.I | re.S)
BARE_AMP_RE = re.compile(r'&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)')


def minify_js(code):
    return rjsmin.jsmin(code)


def minify_css(code):
    return rcssmin.cssmin(code)


def minify_inline(html):
    def rfunc(m):
        tag, kind, body, close = m.group(1), m.group(2).lower(), m.group(3), m.group(4)
        if not body.strip():
            return m.group(0)
        if kind == "style":
            return tag + minify_css(body) + close
        if attr_value(tag, "src") is not None:
            return m.group(0)
        if (attr_value(tag, "type") or "").strip().lower() not in JS_SCRIPT_TYPES:
            return m.group(0)
        return tag + minify_js(body) + close
    return INLINE_RE.sub(rfunc, html)


def escape_ampersands(html):
    # htmlmin unescapes attributes, so "&region=" would come back as "®ion="
    out, pos = [], 0
    for m in INLINE_RE.finditer(html):
        out.append(BARE_AMP_RE.sub("&amp;", html[pos:m.start()]))
        out.append(BARE_AMP_RE.sub("&amp;", m.group(1)) + m.group(3) + m.group(4))
        pos = m.end()
    out.append(BARE_AMP_RE.sub("&amp;", html[pos:]))
    return "".join(out)


def minify_html(code, **opts):
    kw = dict(HTMLMIN_OPTS)
    kw.update(opts)
    return htmlmin.minify(escape_ampersands(minify_inline(code)), **kw)


def read_text(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise MinifyError(path, f"not valid utf-8: {e}") from e
    except OSError as e:
        raise BuildError(f"cannot read {path}: {e}") from e


def write_text(path, txt):
    try:
        ensure_parent(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(txt)
    except OSError as e:
        raise BuildError(f"cannot write {path}: {e}") from e


def run_minifier(fn, code, path):
    try:
        return fn(code)
    except Exception as e:
        raise MinifyError(path, f"{type(e).__name__}: {e}") from e


def minify_js_file(src, dst, ctx, rel=None):
    # script bodies are never stamped; html references carry the marker
    code = read_text(src)
    out = run_minifier(minify_js, code, src)
    write_text(dst, out)
    logging.info(f"[JS] {dst} ({len(code)} -> {len(out)} bytes)")
    return dst


def minify_css_file(src, dst, ctx, rel=None):
    code = read_text(src)
    code = stamp_css_urls(code, ctx, rel or src)
    out = run_minifier(minify_css, code, src)
    write_text(dst, out)
    logging.info(f"[CSS] {dst} ({len(code)} -> {len(out)} bytes)")
    return dst


def minify_html_file(src, dst, ctx, rel=None):
    code = read_text(src)
    code = stamp_html(code, ctx, rel or src)
    out = run_minifier(minify_html, code, src)
    write_text(dst, out)
    logging.info(f"[HTML] {dst} ({len(code)} -> {len(out)} bytes)")
    return dst
