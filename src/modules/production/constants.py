"""Production domain constants."""

from django.db import models


class AssignmentStatus(models.TextChoices):
    ASSIGNED = "assigned", "Assigned"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"


class OverallQuality(models.TextChoices):
    EXCELLENT = "excellent", "Excellent"
    GOOD = "good", "Good"
    SATISFACTORY = "satisfactory", "Satisfactory"
    NEEDS_IMPROVEMENT = "needs_improvement", "Needs improvement"
    REJECTED = "rejected", "Rejected"


ACTIVE_ASSIGNMENT_STATUSES: tuple[str, ...] = (
    AssignmentStatus.ASSIGNED,
    AssignmentStatus.IN_PROGRESS,
)

MIN_RATING = 1
MAX_RATING = 5
PASSING_RATING = 3
