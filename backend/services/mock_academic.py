"""
Mock academic service backing the HTTP API.

Every handler returns structurally valid but fabricated data. Real integrations
(math engines, code analyzers, paper search) are out of scope; these handlers
stand in for them with fixed templates and simple arithmetic.
"""
import logging
import math
import random
import string
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from services.query_classifier import academic_domain
from config import RESEARCH_MAX_RESULTS

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase

STUDY_RECOMMENDATIONS = [
    "Increase focused study intervals",
    "Take regular breaks (Pomodoro technique)",
    "Review material within 24 hours",
    "Practice retrieval through self-testing",
]

WEAK_AREAS = ["Concept application", "Problem solving"]
WEAK_PERFORMANCE_THRESHOLD = 0.7
DEFAULT_MAX_RESULTS = 5


def as_number(value: Any, default: Optional[float] = 0) -> Optional[float]:
    """
    Coerce a loosely typed JSON or query value to a finite number.

    Numbers pass through, numeric strings are parsed, and anything else
    (None, booleans, objects, NaN, infinities) becomes `default`.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def parse_max_results(value: Any) -> int:
    """
    Turn a raw maxResults value into a paper count.

    Missing means the default of 5, unparseable text means zero papers, and
    fractions are truncated toward zero.
    """
    if value is None:
        return DEFAULT_MAX_RESULTS
    return int(as_number(value, default=0))


@dataclass
class ServiceError:
    """Structured error information from a mock handler."""
    code: str
    message: str
    details: Dict[str, Any]


class ResearchSearchError(Exception):
    """Raised when a research search cannot be produced."""

    def __init__(self, error: ServiceError):
        self.error = error
        super().__init__(error.message)


class MockAcademicService:
    """Stateless handlers for the mock academic API."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the service.

        Args:
            rng: Random source for template choice and jittered numbers
            clock: Returns the current UTC time
        """
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def study_query(self, query: Any) -> Dict[str, Any]:
        """Answer a study query with one of two canned analyses."""
        query = "" if query is None else str(query)
        templates = [
            {
                "response": (
                    f'Academic analysis of "{query}" indicates this falls under '
                    f"{academic_domain(query)}. Key considerations include theoretical "
                    f"foundations and practical applications."
                ),
                "sources": ["Peer-reviewed journals", "Academic textbooks", "Conference proceedings"],
                "recommendations": [
                    "Review foundational concepts first",
                    "Practice with sample problems",
                    "Consult additional references",
                ],
                "complexity": "Intermediate",
                "estimatedStudyTime": "2-3 hours",
            },
            {
                "response": (
                    "Based on my knowledge base, this topic requires understanding of prerequisite "
                    "concepts. I recommend a structured learning approach with spaced repetition."
                ),
                "sources": [
                    "Educational research papers",
                    "Learning science principles",
                    "Cognitive psychology studies",
                ],
                "recommendations": [
                    "Create concept maps",
                    "Use active recall techniques",
                    "Teach the concept to others",
                ],
                "complexity": "Advanced",
                "estimatedStudyTime": "4-6 hours",
            },
        ]

        result = dict(self.rng.choice(templates))
        result.update(
            timestamp=self._now_iso(),
            queryId=self.generate_query_id(),
            confidence=0.85 + self.rng.random() * 0.1,
        )
        logger.info(f"Study query answered: {result['queryId']} ({result['complexity']})")
        return result

    def solve_math(self, problem: Any) -> Dict[str, Any]:
        # Placeholder solution regardless of the problem
        return {
            "problem": problem,
            "solution": "x = 3.14159",
            "steps": [
                "Step 1: Identify variables and constants",
                "Step 2: Apply appropriate formula",
                "Step 3: Solve for unknown",
                "Step 4: Verify solution",
            ],
            "method": "Algebraic manipulation",
            "alternativeMethods": ["Graphical", "Numerical", "Geometric"],
            "verification": "Substitute back into original equation",
            "commonMistakes": ["Sign errors", "Unit inconsistencies", "Order of operations"],
        }

    def analyze_code(self, code: Any, language: Any) -> Dict[str, Any]:
        if not isinstance(language, str) or not language:
            language = "python"
        return {
            "language": language,
            "complexity": "O(n log n)",
            "issues": [
                {
                    "type": "optimization",
                    "line": 10,
                    "message": "Consider using list comprehension",
                    "suggestion": "result = [x*2 for x in data]",
                }
            ],
            "bestPractices": ["Add docstrings", "Include type hints", "Write unit tests"],
            "testCases": [{"input": "[1, 2, 3, 4, 5]", "expected": "[2, 4, 6, 8, 10]"}],
        }

    def study_progress(
        self,
        focus_time: Any,
        total_time: Any,
        performance: Any
    ) -> Dict[str, Any]:
        """
        Evaluate study metrics.

        Args:
            focus_time: Minutes of focused study
            total_time: Total minutes in the session
            performance: Score in [0, 1], or None when unknown

        Values that are not numbers count as 0 for the times and as unknown
        for performance.

        Returns:
            Efficiency, recommendations, predicted score, weak areas and plan
        """
        return {
            "efficiency": self.calculate_efficiency(as_number(focus_time), as_number(total_time)),
            "recommendations": list(STUDY_RECOMMENDATIONS),
            "predictedScore": 85 + self.rng.random() * 10,
            "weakAreas": self.identify_weak_areas(as_number(performance, default=None)),
            "studyPlan": {
                "daily": "2 hours focused study, 30 minutes review",
                "weekly": "Practice tests on weekends",
                "monthly": "Comprehensive review session",
            },
        }

    def search_research(self, query: str, max_results: Any = DEFAULT_MAX_RESULTS) -> Dict[str, Any]:
        """
        Fabricate a page of research papers for a query.

        `max_results` may be the raw query-string value; see parse_max_results.

        Raises:
            ResearchSearchError: If max_results is negative
        """
        max_results = parse_max_results(max_results)
        if max_results < 0:
            raise ResearchSearchError(ServiceError(
                code="INVALID_MAX_RESULTS",
                message="maxResults must be non-negative",
                details={"max_results": max_results}
            ))

        count = min(max_results, RESEARCH_MAX_RESULTS)
        papers = [
            {
                "id": f"paper-{i}",
                "title": f"{query} - Research Paper {i + 1}",
                "authors": ["Author A", "Author B", "Author C"],
                "abstract": f"This paper investigates {query} using novel methodology...",
                "year": 2020 + i,
                "citations": self.rng.randrange(100),
                "url": f"https://arxiv.org/abs/{self._random_base36(9)}",
                "relevance": 0.7 + self.rng.random() * 0.3,
            }
            for i in range(count)
        ]

        logger.info(f"Research search for '{query[:50]}' returned {count} papers")
        return {
            "query": query,
            "totalResults": 42,
            "papers": papers,
            "searchTime": f"{self.rng.random():.2f}s",
        }

    @staticmethod
    def calculate_efficiency(focus_time: float, total_time: float) -> float:
        if total_time <= 0:
            return 0
        return min(100, focus_time / total_time * 100)

    @staticmethod
    def identify_weak_areas(performance: Optional[float]) -> List[str]:
        if performance is not None and performance < WEAK_PERFORMANCE_THRESHOLD:
            return list(WEAK_AREAS)
        return []

    def generate_query_id(self) -> str:
        return f"query-{int(time.time() * 1000)}-{self._random_base36(9)}"

    def _random_base36(self, length: int) -> str:
        return "".join(self.rng.choice(_BASE36) for _ in range(length))

    def _now_iso(self) -> str:
        return self.clock().isoformat().replace("+00:00", "Z")
