"""Canned response templates and selection for Athena Study Assistant."""
import logging
import random
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from models.session import StudySession
from services.query_classifier import Category
from services.rendering import format_time

logger = logging.getLogger(__name__)


_PYTHON_SNIPPET = (
    "```python\n"
    "# Efficient algorithm implementation\n"
    "def binary_search(arr, target):\n"
    "    left, right = 0, len(arr) - 1\n"
    "    while left <= right:\n"
    "        mid = left + (right - left) // 2\n"
    "        if arr[mid] == target:\n"
    "            return mid\n"
    "        elif arr[mid] < target:\n"
    "            left = mid + 1\n"
    "        else:\n"
    "            right = mid - 1\n"
    "    return -1\n"
    "```\n"
    "Time Complexity: O(log n)"
)

TEMPLATE_POOLS: Mapping[Category, Tuple[str, ...]] = MappingProxyType({
    Category.MATHEMATICS: (
        "Mathematical analysis suggests:\n```\nLet x be the variable in question.\n"
        "Applying fundamental theorem of calculus:\n∫ f(x) dx from a to b = F(b) - F(a)\n"
        "Where F is the antiderivative of f.\n```\nWould you like a step-by-step derivation?",
        "This mathematical problem requires consideration of:\n1. Initial conditions\n"
        "2. Boundary constraints\n3. Convergence properties\n4. Numerical stability\n\n"
        "I can provide a solution algorithm.",
        "For this mathematical concept:\n- Domain: ℝ (all real numbers)\n"
        "- Range: Depends on function properties\n- Critical points: Where f'(x) = 0\n"
        "- Inflection points: Where f''(x) = 0\n\nShall I elaborate on any specific aspect?",
        "Mathematical framework:\n```python\nimport numpy as np\n# Vector space operations\n"
        "def vector_operations(v1, v2):\n    dot_product = np.dot(v1, v2)\n"
        "    cross_product = np.cross(v1, v2)\n    return dot_product, cross_product\n```\n"
        "This demonstrates fundamental vector operations.",
    ),
    Category.PROGRAMMING: (
        "Programming analysis complete. Key considerations:\n\n"
        "- **Architecture**: Modular design recommended\n"
        "- **Complexity**: Consider time/space tradeoffs\n"
        "- **Testing**: Implement unit tests\n"
        "- **Documentation**: Maintain clear comments\n\n" + _PYTHON_SNIPPET,
    ),
    Category.SCIENCE: (
        "**Scientific Analysis**:\n\nBased on established principles:\n"
        "1. **Hypothesis**: Testable prediction\n2. **Methodology**: Experimental design\n"
        "3. **Data**: Empirical observations\n4. **Analysis**: Statistical evaluation\n"
        "5. **Conclusion**: Evidence-based findings\n\n"
        "**Peer Review Considerations**: Validity, reliability, reproducibility.",
        "**Research Methodology**:\n\nFor this scientific inquiry:\n"
        "- **Control Group**: Essential for comparison\n- **Variables**: Independent vs. dependent\n"
        "- **Sample Size**: Power analysis required\n- **Ethics**: IRB approval if human subjects\n"
        "- **Publication**: Follow journal guidelines\n\nWould you like the experimental protocol?",
    ),
    Category.LITERATURE: (
        "**Literary Analysis Framework**:\n\n1. **Textual Analysis**: Close reading of passages\n"
        "2. **Historical Context**: Author's time period\n3. **Theoretical Lens**: Critical theory application\n"
        "4. **Character Development**: Arc and motivation\n5. **Thematic Elements**: Recurring patterns\n"
        "6. **Stylistic Devices**: Literary techniques employed\n\n"
        "**Thesis Development**: Construct argument with textual evidence.",
        "**Critical Interpretation**:\n\nKey aspects for analysis:\n"
        "- **Narrative Structure**: Linear vs. nonlinear\n- **Point of View**: First, second, or third person\n"
        "- **Symbolism**: Objects representing ideas\n- **Irony**: Verbal, situational, dramatic\n"
        "- **Allusion**: References to other works\n- **Diction**: Word choice and connotation\n\n"
        "Provide specific text for detailed analysis.",
    ),
    Category.EXPLAIN: (
        "**Conceptual Framework**:\n\nThis concept operates within a theoretical framework "
        "established by foundational research. The core principles involve:\n"
        "1. Fundamental axioms\n2. Derived theorems\n3. Practical applications\n"
        "4. Limitations and boundaries\n\n**Key Insight**: Understanding the historical "
        "development of this concept provides context for modern applications.",
        "**Detailed Explanation**:\n\nLet me break this down systematically:\n\n"
        "1. **Definition**: Precise terminology and scope\n2. **Context**: Historical and theoretical background\n"
        "3. **Mechanism**: How it operates or functions\n4. **Examples**: Real-world applications\n"
        "5. **Significance**: Why it matters in the field\n\n"
        "Would you like me to expand on any specific component?",
        "**Comparative Analysis**:\n\nThis concept differs from similar ideas in several key aspects:\n\n"
        "- **Scope**: Broader/narrower application\n- **Methodology**: Different approaches\n"
        "- **Outcomes**: Varied results or implications\n- **Theoretical Basis**: Different foundational assumptions\n\n"
        "Understanding these distinctions is crucial for proper application.",
    ),
    Category.PROCEDURE: (
        "**Procedural Guidelines**:\n\nStep-by-step methodology:\n\n"
        "1. **Preparation**: Gather required materials/resources\n2. **Initialization**: Set up environment/conditions\n"
        "3. **Execution**: Perform core procedure\n4. **Monitoring**: Track progress/metrics\n"
        "5. **Adjustment**: Make necessary modifications\n6. **Completion**: Finalize and document\n"
        "7. **Verification**: Validate results\n8. **Cleanup**: Restore original state\n\n"
        "**Safety Protocols**: Always follow established guidelines.",
    ),
    Category.COMPARISON: (
        "**Comparative Analysis**:\n\n| Aspect | Item A | Item B |\n|--------|--------|--------|\n"
        "| **Definition** | [Define A] | [Define B] |\n| **Purpose** | [Purpose A] | [Purpose B] |\n"
        "| **Method** | [Method A] | [Method B] |\n| **Advantages** | [Pros A] | [Pros B] |\n"
        "| **Limitations** | [Cons A] | [Cons B] |\n| **Use Cases** | [When to use A] | [When to use B] |\n\n"
        "**Key Distinction**: [Main difference]",
    ),
    Category.EXAMPLE: (
        "**Practical Example**:\n\n**Scenario**: Real-world application\n**Context**: Relevant circumstances\n"
        "**Implementation**: Step-by-step application\n**Result**: Expected outcome\n"
        "**Analysis**: Why this demonstrates the concept\n**Variations**: Alternative scenarios\n\n"
        "**Learning Objective**: Understand through applied context.",
        "**Case Study Example**:\n\n1. **Background**: Historical/contextual information\n"
        "2. **Problem Statement**: Specific issue addressed\n3. **Approach**: Methodology employed\n"
        "4. **Implementation**: How it was executed\n5. **Results**: Outcomes achieved\n"
        "6. **Analysis**: Lessons learned\n7. **Application**: How to apply elsewhere",
    ),
    Category.HELP: (
        "I can help with:\n1. Conceptual explanations\n2. Problem solving\n3. Code analysis\n"
        "4. Research assistance\n5. Study planning\n6. Data interpretation\n\n"
        "Please specify your academic need.",
    ),
    Category.GENERAL: (
        "Based on my analysis, this topic requires careful consideration of fundamental principles. "
        "Would you like me to provide a structured explanation?",
        "This query involves multiple aspects. I recommend breaking it down into components "
        "for systematic analysis.",
        "My database contains relevant information on this subject. Shall I provide a comprehensive overview?",
        "This appears to be an advanced topic. Would you like a foundational explanation first, "
        "or shall I proceed directly to complex aspects?",
        "I can assist with this through several approaches:\n- Theoretical framework\n"
        "- Practical applications\n- Historical context\n- Current research trends\n\n"
        "Which perspective would be most helpful?",
    ),
})

QUICK_ACTIONS: Mapping[str, str] = MappingProxyType({
    "explain": (
        "**Concept Explanation Protocol Activated**\n\nI can explain any academic concept. Please specify:\n"
        "1. The concept name\n2. Your current understanding level\n3. Desired depth of explanation\n"
        "4. Any specific aspects to focus on\n\n"
        "Example: 'Explain quantum entanglement at undergraduate level'"
    ),
    "problem": (
        "**Problem Solving Mode**\n\nSubmit your problem for analysis. Include:\n"
        "1. Problem statement\n2. Known variables/constraints\n3. Desired outcome\n4. Any attempted solutions\n\n"
        "I will provide:\n- Step-by-step solution\n- Alternative approaches\n"
        "- Verification methods\n- Related problems for practice"
    ),
    "summary": (
        "**Summary Generation**\n\nProvide the material you'd like summarized. I can:\n"
        "1. Extract key points\n2. Identify main arguments\n3. Note important evidence\n"
        "4. Highlight connections\n5. Create study outlines\n\nMaximum length: 5000 characters"
    ),
    "quiz": (
        "**Quiz Generation System**\n\nBased on our conversation, here's a practice quiz:\n\n"
        "1. **Multiple Choice**: What is the time complexity of binary search?\n"
        "   A) O(n) B) O(log n) C) O(n²) D) O(1)\n\n"
        "2. **Short Answer**: Explain the concept of recursion.\n\n"
        "3. **Problem Solving**: Solve ∫ x² dx from 0 to 3\n\n"
        "Would you like more questions or specific topics?"
    ),
})

DOCUMENTATION = (
    "**Athena Documentation**\n\n**Commands**:\n"
    "• /explain [topic] - Detailed explanation\n• /solve [problem] - Problem solution\n"
    "• /summary [text] - Text summarization\n• /quiz [topic] - Generate quiz\n"
    "• /focus - Toggle focus mode\n• /record - Start/stop session recording\n\n"
    "**Features**:\n• Adaptive learning algorithms\n• Academic database access\n"
    "• Code analysis and debugging\n• Research paper summaries\n• Study progress tracking"
)


class ResponseGenerator:
    """Selects canned responses uniformly at random from immutable pools."""

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            rng: Random source for template draws (seed it for deterministic output)
        """
        self.rng = rng or random.Random()

    def generate(self, category: Category) -> str:
        """
        Draw one response template for the category.

        Args:
            category: Classified query category

        Returns:
            Response text from the category's pool
        """
        pool = TEMPLATE_POOLS[category]
        response = self.rng.choice(pool)
        logger.debug(f"Selected template {pool.index(response) + 1}/{len(pool)} for {category.value}")
        return response

    @staticmethod
    def quick_action(action: str) -> str:
        """
        Return the canned prompt for a quick-action button.

        Raises:
            ValueError: If the action is not one of explain/problem/summary/quiz
        """
        try:
            return QUICK_ACTIONS[action]
        except KeyError:
            raise ValueError(f"Unknown quick action: {action!r}") from None

    @staticmethod
    def documentation() -> str:
        return DOCUMENTATION

    @staticmethod
    def analytics(session: StudySession, query_count: int, knowledge_areas: Iterable[str]) -> str:
        """Summarize the session for the analytics panel."""
        return (
            "**Study Analytics**\n\n"
            f"**Session**: {format_time(session.duration_minutes)}\n"
            f"**Topics**: {len(session.topics)} covered\n"
            f"**Retention**: {session.retention_score}%\n"
            f"**Queries**: {query_count} total\n"
            f"**Focus Areas**: {', '.join(knowledge_areas)}\n\n"
            "**Recommendations**:\n1. Review topics every 48 hours\n"
            "2. Practice active recall\n3. Space repetition for optimal retention"
        )
