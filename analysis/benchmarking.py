"""
Benchmarking engine - compare each company against same-industry peers.

For every company and each of the five standard metrics:
- percentile among peers (descending rank)
- industry average, best in class and gap to best
- direction of the company's own series for that metric label
Plus an overall rank across the whole portfolio and strength/improvement tags.
"""

import logging
from typing import Dict, List, Optional

import numpy as np

from analysis.models import Company, MetricBenchmark, BenchmarkingResult
from analysis.performance_engine import company_metrics
from analysis.calculations.percentiles import descending_percentile_rank
from analysis.calculations.forecast import trend_direction

logger = logging.getLogger(__name__)


STRENGTH_PERCENTILE = 75
IMPROVEMENT_PERCENTILE = 25


class BenchmarkingError(Exception):
    """Raised when a company cannot be benchmarked."""
    pass


def industry_peers(company: Company, companies: List[Company]) -> List[Company]:
    """Other companies sharing the company's industry label."""
    return [
        other for other in companies
        if other.industry == company.industry and other.id != company.id
    ]


def overall_score(metrics: Dict[str, float]) -> float:
    """
    Unnormalized sum of a company's metric values.

    Percentages and ratios are added as-is, so large-scale metrics
    dominate the score.
    """
    return sum(metrics.values())


def overall_rank(score: float, all_scores: List[float]) -> int:
    """
    1-based rank of a score among all portfolio scores.

    Rank is the first position (sorted descending) whose score is <= the
    given score, so tied companies share the best rank.
    """
    ranked = sorted(all_scores, reverse=True)
    for index, other in enumerate(ranked):
        if other <= score:
            return index + 1
    return len(ranked) + 1


def benchmark_metric(
    company: Company,
    metric_name: str,
    value: float,
    peer_values: List[float]
) -> Optional[MetricBenchmark]:
    """
    Compare one metric value against peer values.

    Returns:
        MetricBenchmark, or None when there are no peer values
    """
    if not peer_values:
        return None

    sorted_desc = sorted(peer_values, reverse=True)
    best_in_class = max(peer_values)

    return MetricBenchmark(
        value=value,
        percentile=descending_percentile_rank(value, sorted_desc),
        industry_average=float(np.mean(peer_values)),
        best_in_class=best_in_class,
        gap=best_in_class - value,
        trend=trend_direction(company.series(metric_name)),
    )


def strength_areas(metrics: Dict[str, MetricBenchmark]) -> List[str]:
    return [name for name, result in metrics.items() if result.percentile >= STRENGTH_PERCENTILE]


def improvement_areas(metrics: Dict[str, MetricBenchmark]) -> List[str]:
    return [name for name, result in metrics.items() if result.percentile <= IMPROVEMENT_PERCENTILE]


def benchmark_company(
    company: Company,
    companies: List[Company],
    metrics_by_id: Optional[Dict[str, Dict[str, float]]] = None
) -> BenchmarkingResult:
    """
    Benchmark one company against its industry peers.

    Args:
        company: Company to benchmark
        companies: Full portfolio (peers and ranking population)
        metrics_by_id: Precomputed company_metrics() keyed by id

    Returns:
        BenchmarkingResult; metrics without peer values are omitted

    Raises:
        BenchmarkingError: If the company is not part of the portfolio
    """
    if metrics_by_id is None:
        metrics_by_id = {c.id: company_metrics(c) for c in companies}

    if company.id not in metrics_by_id:
        raise BenchmarkingError(f"Company {company.id} is not part of the portfolio")

    own_metrics = metrics_by_id[company.id]
    peers = industry_peers(company, companies)

    benchmarked = {}
    for metric_name, value in own_metrics.items():
        peer_values = [
            metrics_by_id[peer.id][metric_name] for peer in peers
            if metrics_by_id[peer.id].get(metric_name) is not None
        ]
        result = benchmark_metric(company, metric_name, value, peer_values)
        if result is not None:
            benchmarked[metric_name] = result

    if not peers:
        logger.debug(f"No industry peers for {company.id} ({company.industry})")

    all_scores = [overall_score(m) for m in metrics_by_id.values()]

    return BenchmarkingResult(
        company=company.name,
        company_id=company.id,
        metrics=benchmarked,
        overall_rank=overall_rank(overall_score(own_metrics), all_scores),
        total_companies=len(companies),
        strength_areas=strength_areas(benchmarked),
        improvement_areas=improvement_areas(benchmarked),
    )


def benchmark_all(companies: List[Company]) -> List[BenchmarkingResult]:
    """Benchmark every company, preserving input order."""
    metrics_by_id = {company.id: company_metrics(company) for company in companies}

    results = [
        benchmark_company(company, companies, metrics_by_id)
        for company in companies
    ]

    logger.debug(f"Benchmarked {len(results)} companies")
    return results
