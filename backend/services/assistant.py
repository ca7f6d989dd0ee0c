"""Chat handler for the AI assistant box.

Interprets the user's message, runs a filtered job search (or falls back to
personalised recommendations when nothing was extracted) and renders the
outcome as a sequence of short text cards.
"""

import logging

from config import settings
from models.responses import AssistantReply
from models.schemas.extracted_query import ExtractedQuery
from models.schemas.jobs import Job
from services import recommender
from services.job_search import find_jobs_for_query
from services.job_store import JobStore
from services.query_interpreter import extract

logger = logging.getLogger(__name__)

SEARCH_UNAVAILABLE = "Unable to reach job search at the moment."
RECOMMENDATIONS_HEADER = "🔍 Searching best jobs for you..."
NO_RECOMMENDATIONS = "Sorry, I couldn't find suitable jobs for you right now."
MORE_HINT = 'Type "more" to see more jobs!'


def format_job_card(job: Job) -> str:
    return f"⭐ {job.title} at {job.location} (Wage: ₹{job.wage:g}/day)\n{job.description}"


def format_search_status(query: ExtractedQuery) -> str:
    skills = " and ".join(query.skills)
    if skills and query.location:
        return f"🔍 Finding {skills} jobs in {query.location}..."
    if skills:
        return f"🔍 Finding {skills} jobs..."
    if query.location:
        return f"🔍 Finding jobs in {query.location}..."
    return "🔍 Looking for jobs..."


def format_search_terms(query: ExtractedQuery) -> str:
    terms = []
    if query.skills:
        terms.append(f"skills: {', '.join(query.skills)}")
    if query.location:
        terms.append(f"location: {query.location}")
    return ", ".join(terms)


def _search_messages(query: ExtractedQuery, store: JobStore) -> list[str]:
    messages = [format_search_status(query)]
    try:
        result = find_jobs_for_query(store, query, limit=settings.search_limit)
    except Exception as e:
        logger.error("Job search failed for %s: %s", query, e)
        messages.append(SEARCH_UNAVAILABLE)
        return messages

    jobs = result.jobs
    if not jobs:
        messages.append(f"Sorry, no matching jobs found for {format_search_terms(query)}.")
        return messages

    shown = settings.chat_card_limit
    messages.extend(format_job_card(job) for job in jobs[:shown])
    if len(jobs) > shown:
        messages.append(f"Found {len(jobs)} jobs. Showing top {shown}.")
    return messages


def _recommendation_messages(store: JobStore, worker_id: int | None) -> list[str]:
    messages = [RECOMMENDATIONS_HEADER]
    scored = recommender.recommend_jobs(store, worker_id) if worker_id is not None else None
    if not scored:
        messages.append(NO_RECOMMENDATIONS)
        return messages

    shown = settings.recommendation_card_limit
    messages.extend(format_job_card(s.job) for s in scored[:shown])
    if len(scored) > shown:
        messages.append(MORE_HINT)
    return messages


def respond(text: str, store: JobStore, worker_id: int | None = None) -> AssistantReply:
    """Answer one assistant message with job cards."""
    query = extract(text)
    if query.is_empty:
        logger.info("Nothing extracted from %r, using recommendations", text)
        return AssistantReply(
            query=query,
            messages=_recommendation_messages(store, worker_id),
            fallback_used=True,
        )
    return AssistantReply(query=query, messages=_search_messages(query, store))
