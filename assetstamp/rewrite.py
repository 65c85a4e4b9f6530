import re

from .stamp import refresh_timestamps

# comments and inline script bodies are matched so they pass through untouched
HTML_TAG_RE = re.compile(
    r'(?P<comment><!--.*?-->)'
    r'|(?P<script><script\b[^>]*>)(?P<body>.*?)(?P<close></script\s*>)'
    r'|(?P<open_script><script\b[^>]*>)'
    r'|(?P<link><link\b[^>]*>)',
    re.I | re.S,
)
TAG_NAME_RE = re.compile(r'<[A-Za-z][^\s/>]*')
ATTR_RE = re.compile(
    r'''([^\s"'=<>/`]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?'''
)
CSS_URL_RE = re.compile(r'url\(\s*([\'"]?)([^\'")]+?)\1\s*\)', re.I)


def rewrite_attr(tag, name, fn):
    # first quoted name= value only
    m0 = TAG_NAME_RE.match(tag)
    if not m0:
        return tag
    for m in ATTR_RE.finditer(tag, m0.end()):
        if m.group(1).lower() != name:
            continue
        grp = 2 if m.group(2) is not None else 3 if m.group(3) is not None else None
        if grp is None:
            return tag
        url = m.group(grp)
        new = fn(url)
        if new == url:
            return tag
        return tag[:m.start(grp)] + new + tag[m.end(grp):]
    return tag


def stamp_html_links(html, ctx, src_file=None):
    def js(u):
        return ctx.stamp("html", src_file, u, ctx.js_ext)

    def css(u):
        return ctx.stamp("html", src_file, u, ctx.css_ext)

    def rfunc(m):
        if m.group("comment"):
            return m.group(0)
        if m.group("script"):
            return rewrite_attr(m.group("script"), "src", js) + m.group("body") + m.group("close")
        if m.group("open_script"):
            return rewrite_attr(m.group("open_script"), "src", js)
        return rewrite_attr(m.group("link"), "href", css)

    return HTML_TAG_RE.sub(rfunc, html)


def stamp_html(html, ctx, src_file=None):
    # stale markers outside src/href get refreshed too
    html = refresh_timestamps(html, ctx.timestamp)
    return stamp_html_links(html, ctx, src_file)


def stamp_css_urls(css, ctx, src_file=None):
    def rfunc(m):
        url = m.group(2)
        new = ctx.stamp("css", src_file, url, ctx.asset_ext)
        if new == url:
            return m.group(0)
        start, end = m.start(2) - m.start(), m.end(2) - m.start()
        return m.group(0)[:start] + new + m.group(0)[end:]
    return CSS_URL_RE.sub(rfunc, css)


def attr_value(tag, name):
    m0 = TAG_NAME_RE.match(tag)
    if not m0:
        return None
    for m in ATTR_RE.finditer(tag, m0.end()):
        if m.group(1).lower() == name:
            return next((g for g in m.groups()[1:] if g is not None), "")
    return None
