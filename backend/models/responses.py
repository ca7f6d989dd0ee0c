from pydantic import BaseModel

from models.schemas.extracted_query import ExtractedQuery
from models.schemas.jobs import Job, Pagination, ScoredJob, ScoredWorker


class AssistantReply(BaseModel):
    query: ExtractedQuery = ExtractedQuery()
    messages: list[str] = []
    # True when nothing was extracted and recommendations were served instead
    fallback_used: bool = False


class JobListResponse(BaseModel):
    jobs: list[Job] = []
    pagination: Pagination = Pagination()


class JobSearchResponse(JobListResponse):
    query: ExtractedQuery = ExtractedQuery()


class RecommendationResponse(BaseModel):
    worker_id: int
    recommendations: list[ScoredJob] = []
    total: int = 0


class WorkerRecommendationResponse(BaseModel):
    job_id: int
    recommendations: list[ScoredWorker] = []
    total: int = 0
