"""Search-box handler: free-text query -> filtered job page."""

import logging

from models.schemas.extracted_query import ExtractedQuery
from models.schemas.jobs import JobPage
from services.job_store import JobStore
from services.query_interpreter import extract

logger = logging.getLogger(__name__)


def find_jobs_for_query(
    store: JobStore, query: ExtractedQuery, page: int = 1, limit: int = 10
) -> JobPage:
    """Turn an extracted query into the collaborator's filter values."""
    return store.find_jobs(
        skill=query.skill_filter(),
        location=query.location,
        page=page,
        limit=limit,
    )


def search(
    text: str, store: JobStore, page: int = 1, limit: int = 10
) -> tuple[ExtractedQuery, JobPage]:
    """Interpret a search-box string and run the filtered search.

    An empty interpretation lists the newest jobs unfiltered.
    """
    query = extract(text)
    logger.info("Search %r -> skills=%s location=%s", text, query.skills, query.location)
    return query, find_jobs_for_query(store, query, page=page, limit=limit)
