from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_job_store
from config import settings
from models.requests import ChatRequest, InterpretRequest
from models.responses import (
    AssistantReply,
    JobListResponse,
    JobSearchResponse,
    RecommendationResponse,
    WorkerRecommendationResponse,
)
from models.schemas.extracted_query import ExtractedQuery
from services import assistant, job_search, recommender
from services.job_store import JobStore
from services.query_interpreter import extract

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health(store: JobStore = Depends(get_job_store)):
    return {
        "status": "ok",
        "jobs_loaded": len(store),
    }


@router.post("/interpret", response_model=ExtractedQuery)
async def interpret(body: InterpretRequest):
    return extract(body.text)


@router.post("/assistant/chat", response_model=AssistantReply)
@limiter.limit(settings.chat_rate_limit)
async def chat(
    request: Request,
    body: ChatRequest,
    store: JobStore = Depends(get_job_store),
):
    return assistant.respond(body.text, store, worker_id=body.worker_id)


@router.get("/jobs", response_model=JobListResponse)
async def list_jobs(
    skill: str | None = None,
    location: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    store: JobStore = Depends(get_job_store),
):
    result = store.find_jobs(skill=skill, location=location, page=page, limit=limit)
    return JobListResponse(jobs=result.jobs, pagination=result.pagination)


@router.get("/jobs/search", response_model=JobSearchResponse)
async def search_jobs(
    q: str = Query(..., max_length=settings.max_query_length),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    store: JobStore = Depends(get_job_store),
):
    query, result = job_search.search(q, store, page=page, limit=limit)
    return JobSearchResponse(query=query, jobs=result.jobs, pagination=result.pagination)


@router.get("/recommendations/{worker_id}", response_model=RecommendationResponse)
async def recommendations(worker_id: int, store: JobStore = Depends(get_job_store)):
    scored = recommender.recommend_jobs(store, worker_id)
    if scored is None:
        raise HTTPException(status_code=404, detail=f"Unknown worker: {worker_id}")
    return RecommendationResponse(worker_id=worker_id, recommendations=scored, total=len(scored))


@router.get("/jobs/{job_id}/recommendations", response_model=WorkerRecommendationResponse)
async def worker_recommendations(job_id: int, store: JobStore = Depends(get_job_store)):
    scored = recommender.recommend_workers(store, job_id)
    if scored is None:
        raise HTTPException(status_code=404, detail=f"Unknown job: {job_id}")
    return WorkerRecommendationResponse(job_id=job_id, recommendations=scored, total=len(scored))
