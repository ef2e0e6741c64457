"""Repository exports."""
from benchmap.repositories.bench_repository import BenchRepository
from benchmap.repositories.comment_repository import CommentRepository
from benchmap.repositories.notification_repository import NotificationRepository
from benchmap.repositories.profile_repository import ProfileRepository
from benchmap.repositories.review_repository import ReviewRepository

__all__ = [
    "BenchRepository",
    "CommentRepository",
    "NotificationRepository",
    "ProfileRepository",
    "ReviewRepository",
]
