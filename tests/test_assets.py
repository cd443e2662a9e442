"""Unit tests for bookstore.services.assets: cover image reconcile, store and read-back."""

import base64
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from bookstore.core.errors import ValidationError
from bookstore.services.assets import AssetStore, check_asset_name, decode_content


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _snapshot(root: Path) -> dict[str, bytes]:
    return {p.name: p.read_bytes() for p in sorted(root.iterdir())}


class AssetStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.root = Path(self.enterContext(tempfile.TemporaryDirectory()))
        self.store = AssetStore(self.root)


class TestReconcile(AssetStoreTestCase):
    def test_replace_deletes_old_and_writes_new(self) -> None:
        (self.root / "a.png").write_bytes(b"old")
        content = b"\x89PNG\r\n\x1a\nnew-image"
        self.store.reconcile("a.png", "b.png", _b64(content))
        self.assertFalse((self.root / "a.png").exists())
        self.assertEqual((self.root / "b.png").read_bytes(), content)

    def test_replace_when_old_file_is_already_gone(self) -> None:
        self.store.reconcile("a.png", "b.png", _b64(b"new"))
        self.assertEqual(_snapshot(self.root), {"b.png": b"new"})

    def test_same_reference_without_content_changes_nothing(self) -> None:
        (self.root / "a.png").write_bytes(b"keep")
        before = _snapshot(self.root)
        self.store.reconcile("a.png", "a.png", "")
        self.assertEqual(_snapshot(self.root), before)

    def test_same_reference_without_content_is_idempotent(self) -> None:
        (self.root / "a.png").write_bytes(b"keep")
        self.store.reconcile("a.png", "a.png", None)
        once = _snapshot(self.root)
        self.store.reconcile("a.png", "a.png", None)
        self.assertEqual(_snapshot(self.root), once)

    def test_same_reference_with_content_overwrites(self) -> None:
        (self.root / "a.png").write_bytes(b"v1")
        self.store.reconcile("a.png", "a.png", _b64(b"v2"))
        self.assertEqual(_snapshot(self.root), {"a.png": b"v2"})

    def test_changed_reference_without_content_only_deletes(self) -> None:
        (self.root / "a.png").write_bytes(b"old")
        self.store.reconcile("a.png", "b.png", "")
        self.assertEqual(_snapshot(self.root), {})

    def test_image_removed_from_record(self) -> None:
        (self.root / "a.png").write_bytes(b"old")
        self.store.reconcile("a.png", None, None)
        self.assertEqual(_snapshot(self.root), {})

    def test_first_image_for_record(self) -> None:
        self.store.reconcile(None, "b.png", _b64(b"first"))
        self.assertEqual(_snapshot(self.root), {"b.png": b"first"})

    def test_content_without_reference_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.store.reconcile(None, None, _b64(b"orphan"))

    def test_invalid_base64_is_rejected_and_old_file_kept_for_same_name(self) -> None:
        (self.root / "a.png").write_bytes(b"keep")
        with self.assertRaises(ValidationError):
            self.store.reconcile("a.png", "a.png", "!!not base64!!")
        self.assertEqual(_snapshot(self.root), {"a.png": b"keep"})


class TestReadBack(AssetStoreTestCase):
    def test_existing_file_is_base64_encoded(self) -> None:
        (self.root / "cover.jpg").write_bytes(b"jpeg-bytes")
        self.assertEqual(self.store.load_base64("cover.jpg"), _b64(b"jpeg-bytes"))

    def test_missing_file_or_empty_reference_is_none(self) -> None:
        self.assertIsNone(self.store.load_base64("missing.jpg"))
        self.assertIsNone(self.store.load_base64(""))
        self.assertIsNone(self.store.load_base64(None))

    def test_unusable_name_reads_as_none(self) -> None:
        for name in ("a\x00.png", "é" * 200 + ".png"):
            with self.subTest(name=name):
                with self.assertLogs("bookstore.services.assets", level="WARNING") as captured:
                    self.assertIsNone(self.store.load_base64(name))
                self.assertIn("Could not read image", captured.output[0])

    def test_unreadable_file_reads_as_none(self) -> None:
        (self.root / "locked.png").write_bytes(b"secret")
        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            with self.assertLogs("bookstore.services.assets", level="WARNING"):
                self.assertIsNone(self.store.load_base64("locked.png"))

    def test_store_creates_directory(self) -> None:
        store = AssetStore(self.root / "nested" / "uploads")
        path = store.store("c.png", _b64(b"x"))
        self.assertEqual(path.read_bytes(), b"x")
        self.assertTrue(store.exists("c.png"))
        self.assertTrue(store.remove("c.png"))
        self.assertFalse(store.remove("c.png"))


class TestNamesAndContent(unittest.TestCase):
    def test_plain_names_are_accepted(self) -> None:
        for name in ("a.png", "cover-1.jpeg", "book_2.gif"):
            self.assertEqual(check_asset_name(name), name)

    def test_paths_are_rejected(self) -> None:
        for name in ("../etc/passwd", "a/b.png", "a\\b.png", "..", ".hidden", ""):
            with self.subTest(name=name):
                with self.assertRaises(ValidationError):
                    check_asset_name(name)

    def test_control_characters_and_long_names_are_rejected(self) -> None:
        for name in ("a\x00.png", "a\x1f.png", "a\x7f.png", "é" * 200 + ".png"):
            with self.subTest(name=name):
                with self.assertRaises(ValidationError):
                    check_asset_name(name)

    def test_name_limit_counts_utf8_bytes(self) -> None:
        self.assertEqual(check_asset_name("a" * 255), "a" * 255)
        self.assertEqual(check_asset_name("é" * 127), "é" * 127)
        with self.assertRaises(ValidationError):
            check_asset_name("é" * 128)

    def test_decode_content(self) -> None:
        self.assertEqual(decode_content(_b64(b"abc")), b"abc")
        with self.assertRaises(ValidationError):
            decode_content("abc")
