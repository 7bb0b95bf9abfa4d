"""
Query Classifier for Athena Study Assistant.

This module implements deterministic keyword classification of study queries.
Categories are checked in a fixed priority order and the first rule whose
keywords appear in the query wins, so overlapping queries resolve the same way
every time.
"""

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Set, Tuple

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Query categories, declared in classification priority order."""
    MATHEMATICS = "mathematics"
    PROGRAMMING = "programming"
    SCIENCE = "science"
    LITERATURE = "literature"
    EXPLAIN = "explain"
    PROCEDURE = "procedure"
    COMPARISON = "comparison"
    EXAMPLE = "example"
    HELP = "help"
    GENERAL = "general"


@dataclass
class Classification:
    """
    Result of query classification.

    Attributes:
        category: The winning Category
        matched_keywords: Keywords of the winning rule found in the query
        rule_triggered: Name of the rule applied ("default" for the fallback)
    """
    category: Category
    matched_keywords: List[str] = field(default_factory=list)
    rule_triggered: str = ""


# Topic vocabulary used to grow StudySession.topics
TOPIC_VOCABULARY = (
    "mathematics", "algebra", "calculus", "statistics",
    "programming", "python", "javascript", "algorithms",
    "science", "physics", "chemistry", "biology",
    "literature", "history", "philosophy", "economics",
)

# Server-side domain tags, checked in order
ACADEMIC_DOMAINS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("MATH", ("calculate", "solve", "equation", "derivative")),
    ("SCIENCE", ("physics", "chemistry", "biology", "experiment")),
    ("CS", ("program", "algorithm", "code", "software")),
    ("HUMANITIES", ("literature", "history", "philosophy", "culture")),
)
GENERAL_DOMAIN = "GENERAL ACADEMICS"


class QueryClassifier:
    """
    Keyword classifier that maps a study query to a single Category.

    Matching is plain substring containment on the lowercased query, so
    "solved" matches "solve" and "programming" matches "program".
    """

    # Ordered (category, keywords) rules; order is the tie-break policy
    RULES: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
        (Category.MATHEMATICS, (
            "calculate", "solve", "equation", "formula", "derivative",
            "integral", "matrix", "vector", "algebra", "calculus",
        )),
        (Category.PROGRAMMING, (
            "code", "program", "algorithm", "function", "debug",
            "python", "javascript", "compile", "syntax",
        )),
        (Category.SCIENCE, (
            "physics", "chemistry", "biology", "experiment",
            "hypothesis", "molecule", "scientific",
        )),
        (Category.LITERATURE, (
            "literature", "novel", "poem", "poetry", "author",
            "literary", "shakespeare",
        )),
        (Category.EXPLAIN, ("explain", "what is")),
        (Category.PROCEDURE, ("how to", "steps")),
        (Category.COMPARISON, ("difference between", "compare")),
        (Category.EXAMPLE, ("example", "demonstrate")),
        (Category.HELP, ("help", "assist")),
    )

    def classify_query(self, query: str) -> Classification:
        """
        Classify a query into the first matching category.

        Args:
            query: Raw user text

        Returns:
            Classification; Category.GENERAL when nothing matches or the
            query is empty
        """
        if not query or not query.strip():
            logger.debug("Empty query received, classifying as general")
            return Classification(category=Category.GENERAL, rule_triggered="default")

        query_lower = query.lower()

        for category, keywords in self.RULES:
            matched = self._get_matched_keywords(query_lower, keywords)
            if matched:
                logger.info(f"Classification: {category.value} ({', '.join(matched)}) - {query[:50]}")
                return Classification(
                    category=category,
                    matched_keywords=matched,
                    rule_triggered=f"{category.value}_keywords"
                )

        logger.info(f"Classification: {Category.GENERAL.value} (default) - {query[:50]}")
        return Classification(category=Category.GENERAL, rule_triggered="default")

    @staticmethod
    def _get_matched_keywords(query_lower: str, keywords: Tuple[str, ...]) -> List[str]:
        return [keyword for keyword in keywords if keyword in query_lower]


def extract_topics(query: str) -> Set[str]:
    """Return the vocabulary terms that occur in the lowercased query."""
    query_lower = query.lower()
    return {term for term in TOPIC_VOCABULARY if term in query_lower}


def academic_domain(query: str) -> str:
    """Tag a query with a coarse academic domain for the study query API."""
    query_lower = (query or "").lower()
    for domain, keywords in ACADEMIC_DOMAINS:
        if any(keyword in query_lower for keyword in keywords):
            return domain
    return GENERAL_DOMAIN
