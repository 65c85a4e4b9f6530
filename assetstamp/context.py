from dataclasses import dataclass, field

from . import config
from .stamp import build_timestamp, stamp_if_eligible


def _norm_ext(exts):
    out = []
    for e in exts:
        e = e.strip().lower()
        if not e:
            continue
        out.append(e if e.startswith(".") else "." + e)
    return tuple(out)


@dataclass
class BuildContext:
    timestamp: int
    js_ext: tuple = config.JS_EXT
    css_ext: tuple = config.CSS_EXT
    html_ext: tuple = config.HTML_EXT
    asset_ext: tuple = config.ASSET_EXT_FOR_CSS_URL
    report: dict = field(default_factory=lambda: {"html": [], "css": []})

    def __post_init__(self):
        self.js_ext = _norm_ext(self.js_ext)
        self.css_ext = _norm_ext(self.css_ext)
        self.html_ext = _norm_ext(self.html_ext)
        self.asset_ext = _norm_ext(self.asset_ext)

    @classmethod
    def create(cls, timestamp=None, extra_asset_ext=(), **kw):
        ts = build_timestamp() if timestamp is None else int(timestamp)
        if extra_asset_ext:
            kw["asset_ext"] = tuple(kw.get("asset_ext", config.ASSET_EXT_FOR_CSS_URL)) + tuple(extra_asset_ext)
        return cls(timestamp=ts, **kw)

    @property
    def text_ext(self):
        return self.js_ext + self.css_ext + self.html_ext

    def stamp(self, kind, src_file, url, allow_ext):
        new = stamp_if_eligible(url, allow_ext, self.timestamp)
        if new != url:
            self.log_rewrite(kind, src_file, url, new)
        return new

    def log_rewrite(self, kind, src_file, orig, new):
        self.report.setdefault(kind, []).append({"file": src_file, "from": orig, "to": new})

    def discard(self, src_file):
        for kind, rows in self.report.items():
            self.report[kind] = [r for r in rows if r["file"] != src_file]
