"""
Request and response models for the mock academic API.

Request fields are typed `Any` so loosely typed client input never fails
validation; MockAcademicService coerces the values it reads.
"""
from typing import Any, List, Optional
from pydantic import BaseModel


# POST /api/study/query

class StudyQueryRequest(BaseModel):
    query: Optional[Any] = ""
    context: Optional[Any] = None
    options: Optional[Any] = None


class StudyQueryResponse(BaseModel):
    response: str
    sources: List[str]
    recommendations: List[str]
    complexity: str
    estimatedStudyTime: str
    timestamp: str
    queryId: str
    confidence: float


# POST /api/math/solve

class MathSolveRequest(BaseModel):
    problem: Optional[Any] = None
    steps: Optional[Any] = None


class MathSolveResponse(BaseModel):
    problem: Optional[Any] = None
    solution: str
    steps: List[str]
    method: str
    alternativeMethods: List[str]
    verification: str
    commonMistakes: List[str]


# POST /api/code/analyze

class CodeAnalyzeRequest(BaseModel):
    code: Optional[Any] = None
    language: Optional[Any] = None


class CodeIssue(BaseModel):
    type: str
    line: int
    message: str
    suggestion: str


class CodeTestCase(BaseModel):
    input: str
    expected: str


class CodeAnalyzeResponse(BaseModel):
    language: str
    complexity: str
    issues: List[CodeIssue]
    bestPractices: List[str]
    testCases: List[CodeTestCase]


# POST /api/study/progress

class StudyProgressRequest(BaseModel):
    sessionData: Optional[Any] = None
    metrics: Optional[Any] = None


class StudyPlan(BaseModel):
    daily: str
    weekly: str
    monthly: str


class StudyProgressResponse(BaseModel):
    efficiency: float
    recommendations: List[str]
    predictedScore: float
    weakAreas: List[str]
    studyPlan: StudyPlan


# GET /api/research/search

class ResearchPaper(BaseModel):
    id: str
    title: str
    authors: List[str]
    abstract: str
    year: int
    citations: int
    url: str
    relevance: float


class ResearchSearchResponse(BaseModel):
    query: str
    totalResults: int
    papers: List[ResearchPaper]
    searchTime: str


class ErrorResponse(BaseModel):
    error: str
