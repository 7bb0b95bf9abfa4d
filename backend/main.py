"""Main entry point for the Athena Study Assistant mock academic API."""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import PORT, CORS_ORIGINS
from models.api import (
    StudyQueryRequest, StudyQueryResponse,
    MathSolveRequest, MathSolveResponse,
    CodeAnalyzeRequest, CodeAnalyzeResponse,
    StudyProgressRequest, StudyProgressResponse,
    ResearchSearchResponse, ErrorResponse,
)
from services.mock_academic import MockAcademicService, ResearchSearchError

# Initialize logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Athena Study Assistant",
    description="Mock academic API returning placeholder study, math, code and research data",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Handlers are stateless; one instance serves every request
academic_service = MockAcademicService()

RESEARCH_SEARCH_PATH = "/api/research/search"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Map bodies that are not JSON objects to the generic 500 error payload.

    Request fields accept any JSON type, so this only fires for bodies that
    cannot be read as an object at all.
    """
    logger.warning(
        f"Rejected malformed request to {request.url.path}",
        extra={"error_details": exc.errors()}
    )
    message = "Research search failed" if request.url.path == RESEARCH_SEARCH_PATH else "Invalid request"
    return JSONResponse(status_code=500, content={"error": message})


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Athena Study Assistant API"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "athena-study-assistant",
        "version": "1.0.0"
    }


@app.post("/api/study/query", response_model=StudyQueryResponse)
async def study_query(request: Optional[StudyQueryRequest] = None):
    """
    Answer a study query with a canned academic analysis.

    `context` and `options` are accepted but do not influence the response.
    """
    request = request or StudyQueryRequest()
    query = "" if request.query is None else str(request.query)
    logger.info(f"Processing study query: {query[:100]}")
    return academic_service.study_query(query)


@app.post("/api/math/solve", response_model=MathSolveResponse)
async def math_solve(request: Optional[MathSolveRequest] = None):
    """Return a placeholder solution for a math problem."""
    request = request or MathSolveRequest()
    return academic_service.solve_math(request.problem)


@app.post("/api/code/analyze", response_model=CodeAnalyzeResponse)
async def code_analyze(request: Optional[CodeAnalyzeRequest] = None):
    """Return a placeholder analysis of a code snippet."""
    request = request or CodeAnalyzeRequest()
    return academic_service.analyze_code(request.code, request.language)


@app.post("/api/study/progress", response_model=StudyProgressResponse)
async def study_progress(request: Optional[StudyProgressRequest] = None):
    """
    Evaluate study progress metrics.

    Efficiency is focusTime / totalTime as a percentage capped at 100; weak
    areas are reported when performance falls below 0.7.
    """
    request = request or StudyProgressRequest()
    metrics = request.metrics if isinstance(request.metrics, dict) else {}
    return academic_service.study_progress(
        focus_time=metrics.get("focusTime"),
        total_time=metrics.get("totalTime"),
        performance=metrics.get("performance")
    )


@app.get(
    RESEARCH_SEARCH_PATH,
    response_model=ResearchSearchResponse,
    responses={500: {"model": ErrorResponse}}
)
async def research_search(query: str = "", maxResults: Optional[str] = None):
    """
    Search for research papers (fabricated results).

    Any failure yields HTTP 500 with a fixed error message and no partial results.
    `maxResults` is taken as raw text and parsed by the service.
    """
    try:
        return academic_service.search_research(query, maxResults)
    except ResearchSearchError as e:
        logger.error(
            f"Research search error: {e.error.message}",
            extra={"error_code": e.error.code, "error_details": e.error.details}
        )
        return JSONResponse(status_code=500, content={"error": "Research search failed"})
    except Exception as e:
        logger.error(f"Unexpected error during research search: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Research search failed"})


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Athena Study Assistant API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
