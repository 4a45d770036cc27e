from pathlib import Path
import os
import tempfile
import unittest

from min_row_reporter.core.errors import ConfigError, IoError
from min_row_reporter.utils.detect import DiscoveryFilter, discover_paths


def _touch(p: Path, text: str = "1,2,3\n") -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


class DiscoveryFilterTests(unittest.TestCase):
    def test_leading_dot_is_stripped(self):
        self.assertEqual("csv", DiscoveryFilter(extension=".csv").extension)

    def test_extension_match_is_case_sensitive(self):
        flt = DiscoveryFilter(extension="csv")
        self.assertTrue(flt.matches(Path("a.csv")))
        self.assertFalse(flt.matches(Path("a.CSV")))
        self.assertFalse(flt.matches(Path("a.csv.bak")))

    def test_invalid_values_rejected(self):
        with self.assertRaises(ConfigError):
            DiscoveryFilter(extension="")
        with self.assertRaises(ConfigError):
            DiscoveryFilter(max_depth=0)


class DiscoverPathsTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_recursive_without_prefix(self):
        _touch(self.root / "a.csv")
        _touch(self.root / "sub" / "deep" / "b.csv")
        _touch(self.root / "notes.txt")
        _touch(self.root / "upper.CSV")

        found = sorted(p.name for p in discover_paths(self.root, DiscoveryFilter("csv")))
        self.assertEqual(["a.csv", "b.csv"], found)

    def test_prefix_limits_to_matching_top_level_entries(self):
        _touch(self.root / "fit_1" / "x.csv")
        _touch(self.root / "fit_2" / "nested" / "y.csv")
        _touch(self.root / "other" / "z.csv")
        _touch(self.root / "other" / "fit_inner" / "w.csv")
        _touch(self.root / "top.csv")

        found = discover_paths(self.root, DiscoveryFilter("csv", prefix="fit"))
        self.assertEqual(["x.csv", "y.csv"], sorted(p.name for p in found))
        for p in found:
            top = p.relative_to(self.root).parts[0]
            self.assertTrue(top.startswith("fit"))

    def test_prefix_depth_reaches_nested_matches(self):
        _touch(self.root / "group" / "fit_a" / "a.csv")
        _touch(self.root / "group" / "skip" / "b.csv")

        shallow = discover_paths(self.root, DiscoveryFilter("csv", prefix="fit", max_depth=1))
        deep = discover_paths(self.root, DiscoveryFilter("csv", prefix="fit", max_depth=2))
        self.assertEqual([], shallow)
        self.assertEqual(["a.csv"], [p.name for p in deep])

    def test_prefixed_file_at_top_level_is_included(self):
        _touch(self.root / "fit_direct.csv")
        _touch(self.root / "fit_notes.txt")
        found = discover_paths(self.root, DiscoveryFilter("csv", prefix="fit"))
        self.assertEqual(["fit_direct.csv"], [p.name for p in found])

    def test_empty_root(self):
        self.assertEqual([], discover_paths(self.root, DiscoveryFilter("csv")))

    def test_missing_root_raises(self):
        with self.assertRaises(IoError):
            discover_paths(self.root / "missing", DiscoveryFilter("csv"))

    def test_file_root_raises(self):
        f = _touch(self.root / "a.csv")
        with self.assertRaises(IoError):
            discover_paths(f, DiscoveryFilter("csv"))

    @unittest.skipUnless(hasattr(os, "geteuid"), "POSIX permissions required")
    def test_unreadable_directory_is_skipped(self):
        if os.geteuid() == 0:
            self.skipTest("root ignores directory permissions")
        _touch(self.root / "ok" / "a.csv")
        locked = self.root / "locked"
        _touch(locked / "hidden.csv")
        locked.chmod(0)
        self.addCleanup(locked.chmod, 0o755)

        found = discover_paths(self.root, DiscoveryFilter("csv"))
        self.assertEqual(["a.csv"], [p.name for p in found])

    @unittest.skipUnless(hasattr(os, "geteuid"), "POSIX permissions required")
    def test_unreadable_prefixed_directory_is_skipped(self):
        if os.geteuid() == 0:
            self.skipTest("root ignores directory permissions")
        _touch(self.root / "fit_ok" / "a.csv")
        locked = self.root / "fit_locked"
        _touch(locked / "hidden.csv")
        locked.chmod(0)
        self.addCleanup(locked.chmod, 0o755)

        found = discover_paths(self.root, DiscoveryFilter("csv", prefix="fit"))
        self.assertEqual(["a.csv"], [p.name for p in found])

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks not supported")
    def test_broken_symlink_is_skipped(self):
        _touch(self.root / "real.csv")
        try:
            os.symlink(self.root / "gone.csv", self.root / "dangling.csv")
        except OSError:
            self.skipTest("cannot create symlink")
        found = discover_paths(self.root, DiscoveryFilter("csv"))
        self.assertEqual(["real.csv"], [p.name for p in found])


if __name__ == "__main__":
    unittest.main()
