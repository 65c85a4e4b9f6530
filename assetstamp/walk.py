import os
import shutil

from .errors import BuildError


def _raise(err):
    raise err


def walk(root, extensions=()):
    # sorted for a stable order; a missing root gives []
    if not os.path.isdir(root):
        return []
    exts = {e.lower() for e in extensions}
    out = []
    for dirpath, dirs, files in os.walk(root, onerror=_raise):
        dirs.sort()
        for fn in sorted(files):
            p = os.path.join(dirpath, fn)
            if not exts or os.path.splitext(fn)[1].lower() in exts:
                out.append(p)
    return out


def rel_path(src_root, path):
    return os.path.relpath(path, src_root).replace(os.sep, "/")


def mirror_path(src_root, dst_root, path):
    return os.path.join(dst_root, os.path.relpath(path, src_root))


def ensure_parent(path):
    d = os.path.dirname(path)
    if d and not os.path.isdir(d):
        os.makedirs(d, exist_ok=True)


def _inside(child, parent):
    child, parent = os.path.realpath(child), os.path.realpath(parent)
    return child == parent or child.startswith(parent.rstrip(os.sep) + os.sep)


def clean_dir(dst_root, src_root=None):
    # empties dst_root but keeps the directory itself
    if src_root is not None and _inside(src_root, dst_root):
        raise BuildError(f"refusing to clear {dst_root}: it holds the source tree {src_root}")
    if os.path.isdir(dst_root):
        for entry in sorted(os.listdir(dst_root)):
            p = os.path.join(dst_root, entry)
            if os.path.isdir(p) and not os.path.islink(p):
                shutil.rmtree(p)
            else:
                os.unlink(p)
    os.makedirs(dst_root, exist_ok=True)


def copy_file(src, dst):
    ensure_parent(dst)
    shutil.copyfile(src, dst)
