import re
import time

from .config import STAMP_KEY
from .paths import extension_of, is_external

STAMP_RE = re.compile(r'([?&])' + re.escape(STAMP_KEY) + r'=\d+')


def build_timestamp(now=None):
    return int(time.time() if now is None else now)


def with_timestamp(raw_url, timestamp):
    if not raw_url:
        return raw_url
    url, hash_sign, fragment = raw_url.partition("#")
    if STAMP_RE.search(url):
        url = STAMP_RE.sub(lambda m: f"{m.group(1)}{STAMP_KEY}={timestamp}", url)
    else:
        url += ("&" if "?" in url else "?") + f"{STAMP_KEY}={timestamp}"
    return url + hash_sign + fragment


def is_eligible(u, allow_ext):
    if not u or is_external(u):
        return False
    return extension_of(u) in {e.lower() for e in allow_ext}


def stamp_if_eligible(raw_url, allow_ext, timestamp):
    if not is_eligible(raw_url, allow_ext):
        return raw_url
    return with_timestamp(raw_url, timestamp)


def refresh_timestamps(text, timestamp):
    # blanket pass: stale markers anywhere in the text, not only in src/href
    return STAMP_RE.sub(lambda m: f"{m.group(1)}{STAMP_KEY}={timestamp}", text)
