import posixpath
import re

EXTERNAL_RE = re.compile(r'^(?:https?:)?//', re.I)
DATA_URI_RE = re.compile(r'^data:', re.I)


def is_external(u):
    if not u:
        return False
    return bool(EXTERNAL_RE.match(u) or DATA_URI_RE.match(u))


def strip_query(u):
    return (u or "").split("?", 1)[0].split("#", 1)[0]


def extension_of(u):
    # ".png" for "img/a.PNG?x=1#f", "" when the last segment has no dot
    return posixpath.splitext(strip_query(u))[1].lower()
