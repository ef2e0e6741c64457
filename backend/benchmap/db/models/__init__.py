"""Database models package."""
from benchmap.db.models.bench import BENCH_CATEGORIES, Bench
from benchmap.db.models.comment import BenchComment
from benchmap.db.models.notification import Notification, NotificationType
from benchmap.db.models.profile import Profile
from benchmap.db.models.review import BenchReview

__all__ = [
    "BENCH_CATEGORIES",
    "Bench",
    "BenchComment",
    "BenchReview",
    "Notification",
    "NotificationType",
    "Profile",
]
