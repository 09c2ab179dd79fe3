from .fs import remove_all, write_private_file
from .time import from_unix, normalize_dt, now_utc, to_unix

__all__ = [
    "remove_all",
    "write_private_file",
    "now_utc",
    "normalize_dt",
    "to_unix",
    "from_unix",
]
