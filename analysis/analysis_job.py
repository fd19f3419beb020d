"""
Orchestrated analysis job - portfolio JSON to analysis JSON.
Loads company records, calls the engine, persists the combined results.
"""

import os
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional

from dotenv import load_dotenv

from analysis.models import Company, PortfolioMetrics
from analysis.guardrails import run_all_guardrails
from analysis.engine import (
    analyze_portfolio,
    benchmark_companies,
    analyze_trends,
    generate_portfolio_insights,
)
from ingestion.transforms.normalizers import companies_from_records
from reports.atomic_writer import write_json_atomic

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


DEFAULT_TREND_METRICS = 'Revenue,Net Income'


class AnalysisJobError(Exception):
    """Raised when analysis job fails."""
    pass


def default_trend_metrics() -> List[str]:
    """Metric names from TREND_METRICS (comma separated)."""
    raw = os.getenv('TREND_METRICS', DEFAULT_TREND_METRICS)
    return [name.strip() for name in raw.split(',') if name.strip()]


def load_portfolio(input_path: Path) -> List[Company]:
    """
    Load companies from a JSON file.

    Accepts either {"companies": [...]} or a bare list of company records.

    Raises:
        AnalysisJobError: If the file is missing or has the wrong shape
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise AnalysisJobError(f"Portfolio file not found: {input_path}")

    with open(input_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise AnalysisJobError(f"Portfolio file is not valid JSON: {e}")

    if isinstance(data, dict):
        records = data.get('companies')
    else:
        records = data

    if not isinstance(records, list):
        raise AnalysisJobError("Portfolio JSON must be a list of companies or contain a 'companies' list")

    return companies_from_records(records)


def build_analysis(
    companies: List[Company],
    metric_names: List[str],
    thresholds: Optional[Dict[str, Any]] = None,
    metrics: Optional[PortfolioMetrics] = None
) -> Dict[str, Any]:
    """
    Run every engine operation and assemble one JSON-serializable dictionary.

    Args:
        companies: Portfolio members
        metric_names: Metrics for trend analysis
        thresholds: Insight threshold overrides
        metrics: Portfolio metrics already computed for these companies

    Raises:
        DataQualityError: If the companies violate the input contract
    """
    data_warnings = run_all_guardrails(companies)
    for warning in data_warnings:
        logger.warning(warning)

    if metrics is None:
        metrics = analyze_portfolio(companies)

    return {
        'generated_at': datetime.now().isoformat(),
        'company_count': len(companies),
        'portfolio_metrics': metrics.to_dict(),
        'benchmarks': [result.to_dict() for result in benchmark_companies(companies)],
        'trends': [analysis.to_dict() for analysis in analyze_trends(companies, metric_names)],
        'insights': generate_portfolio_insights(companies, thresholds),
        'data_warnings': data_warnings,
    }


def run_portfolio_analysis(
    input_path: Path,
    output_path: Path,
    metric_names: Optional[List[str]] = None,
    thresholds: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Run complete analysis for a portfolio file and save results to JSON.

    Args:
        input_path: Portfolio JSON file
        output_path: Path to save the analysis JSON
        metric_names: Metrics for trend analysis (defaults to TREND_METRICS)
        thresholds: Insight threshold overrides

    Returns:
        Dictionary with job results and summary; status is 'completed'
        (with the PortfolioMetrics under portfolio_metrics) or 'failed'
        (with error_message)
    """
    start_time = datetime.now()

    if metric_names is None:
        metric_names = default_trend_metrics()

    try:
        companies = load_portfolio(input_path)
        metrics = analyze_portfolio(companies)
        analysis = build_analysis(companies, metric_names, thresholds, metrics)
        write_result = write_json_atomic(analysis, Path(output_path))

        logger.info(
            f"Analyzed {len(companies)} companies from {input_path} -> {write_result['output_path']}"
        )

        return {
            'status': 'completed',
            'output_path': write_result['output_path'],
            'companies_analyzed': len(companies),
            'insights_generated': len(analysis['insights']),
            'warnings': analysis['data_warnings'],
            'portfolio_metrics': metrics,
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }

    except Exception as e:
        logger.error(f"Portfolio analysis failed for {input_path}: {e}")
        return {
            'status': 'failed',
            'error_message': str(e),
            'output_path': None,
            'companies_analyzed': 0,
            'insights_generated': 0,
            'warnings': [],
            'portfolio_metrics': None,
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }
