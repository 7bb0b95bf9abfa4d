"""
Contract check harness for the Athena mock academic API.

This script calls every API route with representative payloads and verifies
status codes and response keys, then reports pass rate and latency.

Usage:
    python evaluate_api.py [--api-url http://localhost:8000] [--output logs/api_report.txt]
"""
import argparse
import statistics
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests


@dataclass
class EndpointCheck:
    """A single request with its expected outcome."""
    id: int
    name: str
    method: str
    path: str
    json: Optional[Dict[str, Any]] = None
    params: Optional[Dict[str, Any]] = None
    expected_status: int = 200
    required_keys: List[str] = field(default_factory=list)
    expected_values: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CheckResult:
    """Outcome of executing an EndpointCheck."""
    check_id: int
    name: str
    status_code: int
    latency_ms: int
    passed: bool
    problems: List[str] = field(default_factory=list)
    error: Optional[str] = None


class ApiEvaluationHarness:
    """Runs endpoint checks against a running API."""

    def __init__(self, api_url: str = "http://localhost:8000", session=None):
        """
        Initialize evaluation harness.

        Args:
            api_url: Base URL for the API
            session: Object with a requests-style `request` method (defaults to requests.Session)
        """
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()
        self.results: List[CheckResult] = []

    @staticmethod
    def load_checks() -> List[EndpointCheck]:
        """Build the standard set of endpoint checks."""
        return [
            EndpointCheck(
                id=1, name="study query", method="POST", path="/api/study/query",
                json={"query": "How do I solve a quadratic equation?", "context": None, "options": {}},
                required_keys=["response", "sources", "recommendations", "complexity",
                               "estimatedStudyTime", "timestamp", "queryId", "confidence"],
            ),
            EndpointCheck(
                id=2, name="math solve", method="POST", path="/api/math/solve",
                json={"problem": "2x + 4 = 10", "steps": True},
                required_keys=["problem", "solution", "steps", "method", "alternativeMethods",
                               "verification", "commonMistakes"],
                expected_values={"problem": "2x + 4 = 10", "solution": "x = 3.14159"},
            ),
            EndpointCheck(
                id=3, name="code analyze", method="POST", path="/api/code/analyze",
                json={"code": "for x in data: result.append(x*2)"},
                required_keys=["language", "complexity", "issues", "bestPractices", "testCases"],
                expected_values={"language": "python"},
            ),
            EndpointCheck(
                id=4, name="study progress", method="POST", path="/api/study/progress",
                json={"sessionData": {}, "metrics": {"focusTime": 30, "totalTime": 60, "performance": 0.5}},
                required_keys=["efficiency", "recommendations", "predictedScore", "weakAreas", "studyPlan"],
                expected_values={"efficiency": 50, "weakAreas": ["Concept application", "Problem solving"]},
            ),
            EndpointCheck(
                id=5, name="research search", method="GET", path="/api/research/search",
                params={"query": "neural networks", "maxResults": 3},
                required_keys=["query", "totalResults", "papers", "searchTime"],
                expected_values={"query": "neural networks", "totalResults": 42},
            ),
            EndpointCheck(
                id=6, name="research search failure", method="GET", path="/api/research/search",
                params={"query": "neural networks", "maxResults": -1},
                expected_status=500,
                expected_values={"error": "Research search failed"},
            ),
            EndpointCheck(
                id=7, name="research search loose count", method="GET", path="/api/research/search",
                params={"query": "neural networks", "maxResults": "abc"},
                required_keys=["query", "totalResults", "papers", "searchTime"],
                expected_values={"papers": []},
            ),
            EndpointCheck(
                id=8, name="study progress null metrics", method="POST", path="/api/study/progress",
                json={"metrics": None},
                required_keys=["efficiency", "weakAreas"],
                expected_values={"efficiency": 0, "weakAreas": []},
            ),
        ]

    def execute_check(self, check: EndpointCheck) -> CheckResult:
        """
        Execute a single check against the API.

        Args:
            check: EndpointCheck to execute

        Returns:
            CheckResult describing what was observed
        """
        start_time = time.time()
        try:
            response = self.session.request(
                check.method,
                f"{self.api_url}{check.path}",
                json=check.json,
                params=check.params,
                timeout=30
            )
        except requests.exceptions.RequestException as e:
            return CheckResult(
                check_id=check.id,
                name=check.name,
                status_code=0,
                latency_ms=int((time.time() - start_time) * 1000),
                passed=False,
                error=str(e)
            )

        latency_ms = int((time.time() - start_time) * 1000)
        problems = []

        if response.status_code != check.expected_status:
            problems.append(f"status {response.status_code} != {check.expected_status}")

        try:
            data = response.json()
        except ValueError:
            data = {}
            problems.append("response is not JSON")

        for key in check.required_keys:
            if key not in data:
                problems.append(f"missing key '{key}'")
        for key, expected in check.expected_values.items():
            if data.get(key) != expected:
                problems.append(f"{key}={data.get(key)!r}, expected {expected!r}")

        return CheckResult(
            check_id=check.id,
            name=check.name,
            status_code=response.status_code,
            latency_ms=latency_ms,
            passed=not problems,
            problems=problems
        )

    def run_evaluation(self, checks: List[EndpointCheck]) -> None:
        """Execute all checks and collect results."""
        print(f"Running {len(checks)} endpoint checks against {self.api_url or 'test client'}...")
        print()

        for i, check in enumerate(checks, start=1):
            result = self.execute_check(check)
            self.results.append(result)

            if result.error:
                print(f"[{i}/{len(checks)}] {check.name}: ERROR {result.error}")
            elif result.passed:
                print(f"[{i}/{len(checks)}] {check.name}: ok ({result.status_code}, {result.latency_ms}ms)")
            else:
                print(f"[{i}/{len(checks)}] {check.name}: FAILED {'; '.join(result.problems)}")

    def calculate_metrics(self) -> Dict[str, Any]:
        """
        Summarize results.

        Returns:
            Dictionary with totals, pass rate and latency statistics
        """
        total = len(self.results)
        passed = sum(1 for r in self.results if r.passed)
        latencies = [r.latency_ms for r in self.results if r.error is None]

        return {
            "total_checks": total,
            "passed_checks": passed,
            "failed_checks": total - passed,
            "pass_rate": passed / total if total else 0.0,
            "latency": {
                "mean_ms": statistics.mean(latencies) if latencies else 0.0,
                "max_ms": max(latencies) if latencies else 0,
            },
            "failures": {r.name: r.error or "; ".join(r.problems) for r in self.results if not r.passed},
        }

    def generate_report(self, metrics: Dict[str, Any], output_path: str) -> None:
        """
        Generate evaluation report and save to file.

        Args:
            metrics: Output of calculate_metrics
            output_path: Path to save report
        """
        report_lines = [
            "=" * 80,
            "Athena Study Assistant - API Contract Report",
            "=" * 80,
            "",
            f"Generated: {time.strftime('%Y-%m-%d %H:%M:%S')}",
            f"API URL: {self.api_url}",
            "",
            f"Total Checks:   {metrics['total_checks']}",
            f"Passed:         {metrics['passed_checks']}",
            f"Failed:         {metrics['failed_checks']}",
            f"Pass Rate:      {metrics['pass_rate']:.2%}",
            f"Mean Latency:   {metrics['latency']['mean_ms']:.1f} ms",
            f"Max Latency:    {metrics['latency']['max_ms']} ms",
            "",
        ]
        if metrics["failures"]:
            report_lines.append("FAILURES")
            report_lines.append("-" * 80)
            for name, reason in metrics["failures"].items():
                report_lines.append(f"{name}: {reason}")

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(report_lines) + "\n", encoding="utf-8")
        print(f"Report saved to {path}")


def main():
    parser = argparse.ArgumentParser(
        description="Contract check harness for the Athena mock academic API"
    )
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="Base URL for the API (default: http://localhost:8000)"
    )
    parser.add_argument(
        "--output",
        default="logs/api_report.txt",
        help="Output path for the report (default: logs/api_report.txt)"
    )

    args = parser.parse_args()

    harness = ApiEvaluationHarness(api_url=args.api_url)
    harness.run_evaluation(harness.load_checks())
    metrics = harness.calculate_metrics()
    harness.generate_report(metrics, args.output)

    # Exit with error code if there were failures
    sys.exit(1 if metrics["failed_checks"] else 0)


if __name__ == "__main__":
    main()
