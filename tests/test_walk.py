import os
import tempfile
import unittest
from unittest.mock import patch

from assetstamp.errors import BuildError
from assetstamp.walk import clean_dir, copy_file, mirror_path, rel_path, walk

from .helpers import read, tree, write


class TestWalk(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        for rel in ("z/e.js", "a/b.JS", "a/c.css", "d.txt", "a/deep/f.js"):
            write(self.root, rel, "x")

    def tearDown(self):
        self._tmp.cleanup()

    def test_filters_by_lowercased_extension(self):
        got = [rel_path(self.root, p) for p in walk(self.root, (".js",))]
        self.assertEqual(got, ["a/b.JS", "a/deep/f.js", "z/e.js"])

    def test_empty_set_matches_all(self):
        got = [rel_path(self.root, p) for p in walk(self.root, ())]
        self.assertEqual(sorted(got), tree(self.root))
        self.assertEqual(len(got), 5)

    def test_order_is_stable(self):
        self.assertEqual(walk(self.root, ()), walk(self.root, ()))

    def test_missing_root(self):
        self.assertEqual(walk(os.path.join(self.root, "nope"), (".js",)), [])

    def test_traversal_error_propagates(self):
        with patch("os.scandir", side_effect=PermissionError("denied")):
            with self.assertRaises(PermissionError):
                walk(self.root, ())

    def test_mirror_path(self):
        src = os.path.join(self.root, "a", "c.css")
        out = mirror_path(self.root, "/out", src)
        self.assertEqual(out, os.path.join("/out", "a", "c.css"))


class TestOutputDir(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def test_clean_dir_empties_but_keeps_root(self):
        dst = os.path.join(self.root, "dist")
        write(dst, "old.js", "x")
        write(dst, "sub/old.css", "y")
        clean_dir(dst)
        self.assertTrue(os.path.isdir(dst))
        self.assertEqual(os.listdir(dst), [])

    def test_clean_dir_creates_missing_root(self):
        dst = os.path.join(self.root, "new", "dist")
        clean_dir(dst)
        self.assertTrue(os.path.isdir(dst))

    def test_refuses_to_clear_source(self):
        src = os.path.join(self.root, "site", "src")
        write(src, "index.html", "<p>keep</p>")
        with self.assertRaises(BuildError):
            clean_dir(os.path.join(self.root, "site"), src)
        with self.assertRaises(BuildError):
            clean_dir(src, src)
        self.assertEqual(read(src, "index.html"), "<p>keep</p>")

    def test_copy_file_is_byte_identical(self):
        data = bytes(range(256))
        src = write(self.root, "in/blob.bin", data)
        dst = os.path.join(self.root, "out", "x", "blob.bin")
        copy_file(src, dst)
        self.assertEqual(read(self.root, "out/x/blob.bin", binary=True), data)


if __name__ == "__main__":
    unittest.main()
