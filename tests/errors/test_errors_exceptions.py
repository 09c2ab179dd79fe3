import errno
import unittest

from gdcontext.errors.exceptions import (
    GDContextError,
    IOFailureError,
    MalformedRecordError,
    NoContextFoundError,
    NotADirectoryError,
    map_os_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = GDContextError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_details_default_to_empty_dict(self) -> None:
        err = MalformedRecordError("bad")
        self.assertEqual(err.details, {})
        self.assertIsNone(err.cause)

    def test_all_errors_share_base(self) -> None:
        for cls in (NoContextFoundError, NotADirectoryError, IOFailureError, MalformedRecordError):
            self.assertTrue(issubclass(cls, GDContextError))

    def test_map_os_error_enotdir(self) -> None:
        exc = OSError(errno.ENOTDIR, "Not a directory")
        err = map_os_error(exc, path="/x/y", operation="stat")
        self.assertIsInstance(err, NotADirectoryError)
        self.assertIs(err.cause, exc)

    def test_map_os_error_other_is_io_failure(self) -> None:
        exc = FileNotFoundError(errno.ENOENT, "No such file or directory")
        err = map_os_error(exc, path="/x/y", operation="read record")
        self.assertIsInstance(err, IOFailureError)
        self.assertEqual(err.details["path"], "/x/y")
        self.assertEqual(err.details["operation"], "read record")
        self.assertEqual(err.details["errno"], errno.ENOENT)
        self.assertIn("/x/y", str(err))


if __name__ == "__main__":
    unittest.main()
