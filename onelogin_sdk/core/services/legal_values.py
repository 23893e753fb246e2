"""Legal values lookup for rule conditions and actions."""
from __future__ import annotations
from typing import List

from ..client import ResourceRepository
from ..models import LegalValue
from ..resource import decode_many


class LegalValuesService:
    """Fetch name/value pairs from any legal-values endpoint."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        self.repository = repository
        self.base_url = base_url.rstrip("/")

    def find(self, path: str) -> List[LegalValue]:
        """Return the legal values published at ``path``.

        Args:
            path: Path relative to the base URL, or an absolute URL
        """
        url = path if path.startswith(("http://", "https://")) else f"{self.base_url}{path}"
        return decode_many(LegalValue, self.repository.read(url))
