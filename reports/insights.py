"""
Portfolio insight rules.
Deterministic threshold checks over PortfolioMetrics, emitted in fixed order.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Any, Callable, List, Optional

import yaml
from dotenv import load_dotenv

from analysis.models import PortfolioMetrics

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


DEFAULT_THRESHOLDS_PATH = './config/insight_thresholds.yml'

DEFAULT_THRESHOLDS = {
    'max_concentration_risk': 0.5,
    'min_diversification_ratio': 0.7,
    'strong_roe': 15.0,
    'strong_risk_adjusted_return': 1.5,
    'min_industries': 3,
}

HIGH_CONCENTRATION = (
    'Portfolio shows high concentration risk - consider diversifying across more companies/industries'
)
LIMITED_DIVERSIFICATION = 'Limited diversification benefits - companies may be highly correlated'
STRONG_ROE = 'Strong portfolio ROE performance indicates effective capital allocation'
STRONG_RISK_ADJUSTED_RETURN = (
    'Excellent risk-adjusted returns - portfolio generating value above risk taken'
)
EXPAND_INDUSTRIES = 'Consider expanding into additional industries for better risk distribution'


class InsightError(Exception):
    """Raised when insight thresholds cannot be loaded."""
    pass


def load_insight_thresholds(config_path: Optional[str] = None) -> Dict[str, float]:
    """
    Load insight thresholds from YAML, merged over the defaults.

    Expected shape:
        thresholds:
          max_concentration_risk: 0.5
          ...

    Args:
        config_path: Path to thresholds file. When omitted, the path comes
            from INSIGHT_THRESHOLDS_PATH and a missing file means defaults.

    Returns:
        Dictionary of thresholds

    Raises:
        InsightError: If an explicit file is missing or the file is malformed
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = os.getenv('INSIGHT_THRESHOLDS_PATH', DEFAULT_THRESHOLDS_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        if explicit:
            raise InsightError(f"Insight thresholds file not found: {config_path}")
        logger.debug(f"No thresholds file at {config_path}; using defaults")
        return dict(DEFAULT_THRESHOLDS)

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InsightError(f"Failed to parse insight thresholds: {e}")

    if not isinstance(config, dict) or 'thresholds' not in config:
        raise InsightError("Insight thresholds config missing 'thresholds' section")

    overrides = config['thresholds'] or {}
    unknown = set(overrides) - set(DEFAULT_THRESHOLDS)
    if unknown:
        raise InsightError(f"Unknown insight thresholds: {sorted(unknown)}")

    thresholds = dict(DEFAULT_THRESHOLDS)
    for key, value in overrides.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InsightError(f"Threshold {key} must be numeric, got {value!r}")
        thresholds[key] = value

    return thresholds


def concentration_warning(metrics: PortfolioMetrics, thresholds: Dict[str, Any]) -> Optional[str]:
    # Strict: exactly two equal-weight companies (0.5) do not trigger
    if metrics.concentration_risk > thresholds['max_concentration_risk']:
        return HIGH_CONCENTRATION
    return None


def correlation_warning(metrics: PortfolioMetrics, thresholds: Dict[str, Any]) -> Optional[str]:
    if metrics.diversification_ratio < thresholds['min_diversification_ratio']:
        return LIMITED_DIVERSIFICATION
    return None


def roe_note(metrics: PortfolioMetrics, thresholds: Dict[str, Any]) -> Optional[str]:
    if metrics.weighted_average_roe > thresholds['strong_roe']:
        return STRONG_ROE
    return None


def risk_adjusted_note(metrics: PortfolioMetrics, thresholds: Dict[str, Any]) -> Optional[str]:
    if metrics.risk_adjusted_return > thresholds['strong_risk_adjusted_return']:
        return STRONG_RISK_ADJUSTED_RETURN
    return None


def industry_suggestion(metrics: PortfolioMetrics, thresholds: Dict[str, Any]) -> Optional[str]:
    if len(metrics.industry_breakdown) < thresholds['min_industries']:
        return EXPAND_INDUSTRIES
    return None


INSIGHT_RULES: List[Callable[[PortfolioMetrics, Dict[str, Any]], Optional[str]]] = [
    concentration_warning,
    correlation_warning,
    roe_note,
    risk_adjusted_note,
    industry_suggestion,
]


def generate_insights(
    metrics: PortfolioMetrics,
    thresholds: Optional[Dict[str, Any]] = None
) -> List[str]:
    """
    Apply every insight rule in order.

    Args:
        metrics: Portfolio metrics to assess
        thresholds: Threshold overrides (defaults to DEFAULT_THRESHOLDS)

    Returns:
        Advisory strings in rule order
    """
    merged = dict(DEFAULT_THRESHOLDS)
    if thresholds:
        merged.update(thresholds)

    insights = []
    for rule in INSIGHT_RULES:
        insight = rule(metrics, merged)
        if insight is not None:
            insights.append(insight)

    return insights
