"""Production repositories package."""

from modules.production.repositories.django_repository import (
    AssignmentDjangoRepository,
    QualityCheckDjangoRepository,
)
from modules.production.repositories.interfaces import (
    IAssignmentRepository,
    IQualityCheckRepository,
)

__all__ = [
    "AssignmentDjangoRepository",
    "IAssignmentRepository",
    "IQualityCheckRepository",
    "QualityCheckDjangoRepository",
]
