import json
import logging
import os
from dataclasses import dataclass, field

from .audit import find_missing_refs
from .context import BuildContext
from .errors import BuildError, MinifyError
from .minify import minify_css_file, minify_html_file, minify_js_file, write_text
from .walk import clean_dir, copy_file, mirror_path, rel_path, walk


@dataclass
class BuildResult:
    timestamp: int
    written: list = field(default_factory=list)
    copied: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    missing: list = field(default_factory=list)

    @property
    def ok(self):
        return not self.skipped


def _minify_all(kind, files, driver, src, dst, ctx, result):
    for file in files:
        rel = rel_path(src, file)
        out = mirror_path(src, dst, file)
        try:
            driver(file, out, ctx, rel)
        except MinifyError as e:
            ctx.discard(rel)
            logging.error(f"[SKIP] {kind} {rel} :: {e.detail}")
            result.skipped.append((rel, e.detail))
            continue
        result.written.append(rel)


def write_report(path, ctx, result):
    payload = {
        "timestamp": ctx.timestamp,
        "html": ctx.report.get("html", []),
        "css": ctx.report.get("css", []),
        "skipped": [{"file": f, "error": msg} for f, msg in result.skipped],
        "missing": result.missing,
    }
    write_text(path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
    logging.info(f"[REPORT] wrote {path}")


def run(src, dst, ctx, report_path=None, audit=True):
    result = BuildResult(timestamp=ctx.timestamp)

    logging.info(f"[CLEAN] {dst}")
    clean_dir(dst, src)

    # rewrite happens inside each driver, before its minifier sees the text
    _minify_all("js", walk(src, ctx.js_ext), minify_js_file, src, dst, ctx, result)
    _minify_all("css", walk(src, ctx.css_ext), minify_css_file, src, dst, ctx, result)
    _minify_all("html", walk(src, ctx.html_ext), minify_html_file, src, dst, ctx, result)

    text_ext = set(ctx.text_ext)
    for file in walk(src, ()):
        if os.path.splitext(file)[1].lower() in text_ext:
            continue
        out = mirror_path(src, dst, file)
        copy_file(file, out)
        result.copied.append(rel_path(src, file))
        logging.info(f"[COPY] {out}")

    if audit:
        result.missing = find_missing_refs(dst, ctx.html_ext)
    if report_path:
        write_report(report_path, ctx, result)

    logging.info(f"[DONE] {len(result.written)} minified, {len(result.copied)} copied, "
                 f"{len(result.skipped)} skipped, t={ctx.timestamp}")
    return result


def build(src, dst, timestamp=None, report_path=None, audit=True, extra_asset_ext=()):
    ctx = BuildContext.create(timestamp, extra_asset_ext=extra_asset_ext)
    try:
        return run(src, dst, ctx, report_path=report_path, audit=audit)
    except OSError as e:
        raise BuildError(f"build aborted: {e}") from e
