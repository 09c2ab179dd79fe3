import unittest
from datetime import datetime, timedelta, timezone

from gdcontext.util.time import from_unix, normalize_dt, now_utc, to_unix


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_aware(self) -> None:
        dt = now_utc()
        self.assertIsNotNone(dt.tzinfo)

    def test_normalize_dt_rejects_naive(self) -> None:
        with self.assertRaises(ValueError):
            normalize_dt(datetime(2025, 1, 1))
        with self.assertRaises(TypeError):
            normalize_dt("2025-01-01")  # type: ignore[arg-type]

    def test_to_unix_drops_subseconds_and_honours_offset(self) -> None:
        jst = timezone(timedelta(hours=9))
        dt = datetime(2025, 1, 1, 9, 0, 0, 500000, tzinfo=jst)
        self.assertEqual(to_unix(dt), 1735689600)

    def test_from_unix_is_utc(self) -> None:
        dt = from_unix(1735689600)
        self.assertEqual(dt, datetime(2025, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(dt.utcoffset(), timedelta(0))

    def test_from_unix_rejects_non_int(self) -> None:
        with self.assertRaises(TypeError):
            from_unix(True)  # type: ignore[arg-type]
        with self.assertRaises(TypeError):
            from_unix(1.5)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
