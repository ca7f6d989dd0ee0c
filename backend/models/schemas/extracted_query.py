"""Interpreter output: structured job filter extracted from one utterance."""

from pydantic import BaseModel


class ExtractedQuery(BaseModel):
    """Skills and location pulled out of a free-text job request.

    `skills` holds canonical skill strings, unique and in discovery order.
    An empty query (no skills, no location) is a valid result, not an error.
    """
    skills: list[str] = []
    location: str | None = None

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.skills and self.location is None

    def skill_filter(self) -> str | None:
        """Skills joined into the single comma-separated filter value."""
        return ",".join(self.skills) or None
