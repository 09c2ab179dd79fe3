import json
import os
import stat
import tempfile
import unittest

from gdcontext.config import ContextConfig
from gdcontext.errors import (
    IOFailureError,
    MalformedRecordError,
    NoContextFoundError,
    NotADirectoryError,
)
from gdcontext.models import Context, IndexEntry, IndexFile
from gdcontext.store import ContextStore

# A marker name that will not exist above the temporary directory.
_MARKER = ".gdcontext-test-marker"


class TestContextStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = os.path.realpath(self._tmp.name)
        self.store = ContextStore(ContextConfig(marker_dir=_MARKER))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _read_json(self, path: str) -> dict:
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    # ----------------------------
    # initialize
    # ----------------------------
    def test_initialize_first_time(self) -> None:
        root = os.path.join(self.tmp, "project")
        marker, first_init, ctx = self.store.initialize(root)

        self.assertTrue(first_init)
        self.assertEqual(marker, os.path.join(root, _MARKER))
        self.assertTrue(os.path.isdir(marker))
        self.assertEqual(ctx.abs_path, root)
        self.assertFalse(ctx.is_authenticated)

        cred_path = self.store.credentials_path(root)
        self.assertEqual(
            self._read_json(cred_path),
            {"client_id": "", "client_secret": "", "refresh_token": ""},
        )
        self.assertEqual(stat.S_IMODE(os.stat(cred_path).st_mode), 0o600)

    def test_initialize_twice_is_not_first_init(self) -> None:
        self.store.initialize(self.tmp)
        _, first_init, _ = self.store.initialize(self.tmp)
        self.assertFalse(first_init)

    def test_initialize_marker_is_a_file(self) -> None:
        with open(os.path.join(self.tmp, _MARKER), "w", encoding="utf-8") as f:
            f.write("not a dir")
        with self.assertRaises(NotADirectoryError):
            self.store.initialize(self.tmp)

    # ----------------------------
    # discover
    # ----------------------------
    def test_discover_from_nested_directory(self) -> None:
        self.store.initialize(self.tmp)
        nested = os.path.join(self.tmp, "a", "b", "c")
        os.makedirs(nested)

        ctx = self.store.discover(nested)
        self.assertEqual(ctx.abs_path, self.tmp)

    def test_discover_is_idempotent(self) -> None:
        self.store.initialize(self.tmp)
        nested = os.path.join(self.tmp, "a")
        os.makedirs(nested)

        first = self.store.discover(nested)
        second = self.store.discover(nested)
        self.assertEqual(first.abs_path, second.abs_path)
        self.assertEqual(first, second)

    def test_discover_picks_nearest_context(self) -> None:
        self.store.initialize(self.tmp)
        inner = os.path.join(self.tmp, "inner")
        self.store.initialize(inner)
        nested = os.path.join(inner, "deep")
        os.makedirs(nested)

        self.assertEqual(self.store.discover(nested).abs_path, inner)

    def test_discover_without_context(self) -> None:
        with self.assertRaises(NoContextFoundError):
            self.store.discover(self.tmp)

    def test_discover_ignores_marker_file(self) -> None:
        with open(os.path.join(self.tmp, _MARKER), "w", encoding="utf-8") as f:
            f.write("")
        with self.assertRaises(NoContextFoundError):
            self.store.discover(self.tmp)

    def test_discover_loads_credentials(self) -> None:
        _, _, ctx = self.store.initialize(self.tmp)
        self.store.write(ctx.with_credentials("id", "secret", "refresh"))

        found = self.store.discover(self.tmp)
        self.assertEqual(found.client_id, "id")
        self.assertEqual(found.refresh_token, "refresh")

    def test_discover_missing_credentials_propagates(self) -> None:
        os.makedirs(os.path.join(self.tmp, _MARKER))
        with self.assertRaises(IOFailureError):
            self.store.discover(self.tmp)

    def test_discover_malformed_credentials_propagates(self) -> None:
        self.store.initialize(self.tmp)
        with open(self.store.credentials_path(self.tmp), "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(MalformedRecordError):
            self.store.discover(self.tmp)

    # ----------------------------
    # records
    # ----------------------------
    def test_partial_credentials_are_malformed(self) -> None:
        self.store.initialize(self.tmp)
        with open(self.store.credentials_path(self.tmp), "w", encoding="utf-8") as f:
            json.dump({"client_id": "id"}, f)
        with self.assertRaises(MalformedRecordError):
            self.store.read(Context(abs_path=self.tmp))

    def test_non_object_record_is_malformed(self) -> None:
        self.store.initialize(self.tmp)
        with open(self.store.credentials_path(self.tmp), "w", encoding="utf-8") as f:
            json.dump(["client_id"], f)
        with self.assertRaises(MalformedRecordError):
            self.store.read(Context(abs_path=self.tmp))

    def test_write_restores_owner_only_mode(self) -> None:
        _, _, ctx = self.store.initialize(self.tmp)
        path = self.store.credentials_path(self.tmp)
        os.chmod(path, 0o644)

        self.store.write(ctx)
        self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o600)

    def test_write_without_marker_is_io_failure(self) -> None:
        with self.assertRaises(IOFailureError):
            self.store.write(Context(abs_path=self.tmp))

    def test_indices_round_trip(self) -> None:
        _, _, ctx = self.store.initialize(self.tmp)
        index = IndexFile(
            name="drive",
            index=[
                IndexEntry(
                    file_id="F1",
                    etag="e1",
                    md5_checksum="m1",
                    mime_type="text/plain",
                    mod_time=1735689600,
                    version=4,
                    remote=True,
                )
            ],
        )
        self.store.write_indices(ctx, index)

        path = self.store.indices_path(self.tmp)
        self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o600)
        self.assertEqual(self._read_json(path)["index"][0]["mod_time"], 1735689600)
        self.assertEqual(self.store.read_indices(ctx), index)

    def test_indices_at_explicit_root(self) -> None:
        _, _, ctx = self.store.initialize(self.tmp)
        other = os.path.join(self.tmp, "other")
        self.store.initialize(other)

        self.store.write_indices(ctx, IndexFile(name="other"), root=other)

        self.assertTrue(os.path.exists(self.store.indices_path(other)))
        self.assertFalse(os.path.exists(self.store.indices_path(self.tmp)))
        self.assertEqual(self.store.read_indices(ctx, root=other).name, "other")

    def test_missing_indices_is_io_failure(self) -> None:
        _, _, ctx = self.store.initialize(self.tmp)
        with self.assertRaises(IOFailureError):
            self.store.read_indices(ctx)

    def test_malformed_indices(self) -> None:
        _, _, ctx = self.store.initialize(self.tmp)
        with open(self.store.indices_path(self.tmp), "w", encoding="utf-8") as f:
            json.dump({"name": "x", "index": [{"file_id": "F", "version": "v2"}]}, f)
        with self.assertRaises(MalformedRecordError):
            self.store.read_indices(ctx)


if __name__ == "__main__":
    unittest.main()
