"""Base class for health check plugins."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from ..models import FileEntry, HealthIssue


class HealthCheck(ABC):
    """Contract for checks that emit health issues from a file snapshot."""

    name: str = ""

    @abstractmethod
    def run(self, files: Sequence[FileEntry], root: Path) -> List[HealthIssue]:
        """Return the issues found in ``files``; never mutate the snapshot."""
