"""Tailor domain constants."""

from decimal import Decimal

from django.db import models


class SkillLevel(models.TextChoices):
    BEGINNER = "beginner", "Beginner"
    INTERMEDIATE = "intermediate", "Intermediate"
    ADVANCED = "advanced", "Advanced"
    EXPERT = "expert", "Expert"


DEFAULT_MAX_CONCURRENT_ORDERS = 5
MAX_QUALITY_RATING = Decimal("5.00")
RATING_PLACES = Decimal("0.01")
