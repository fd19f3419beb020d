"""
Company store schema and analysis result records.
Inputs are frozen; results are plain dataclasses recomputed on every call.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Any, List, Optional, Tuple, Mapping, Sequence


# Standard series labels
REVENUE = 'Revenue'
NET_INCOME = 'Net Income'
TOTAL_ASSETS = 'Total Assets'
TOTAL_LIABILITIES = 'Total Liabilities'
SHAREHOLDERS_EQUITY = 'Shareholders Equity'

# Label -> FinancialData attribute
STANDARD_SERIES = {
    REVENUE: 'revenue',
    NET_INCOME: 'net_income',
    TOTAL_ASSETS: 'total_assets',
    TOTAL_LIABILITIES: 'total_liabilities',
    SHAREHOLDERS_EQUITY: 'shareholders_equity',
}

Series = Tuple[float, ...]


def _to_series(values: Optional[Sequence[float]]) -> Optional[Series]:
    if values is None:
        return None
    return tuple(float(v) for v in values)


@dataclass(frozen=True)
class FinancialData:
    """
    Per-company financial time series, earliest period first.

    None marks an absent series, an empty tuple a series reported
    with no periods. Non-standard labels live in `extra`.
    """
    revenue: Optional[Series] = None
    net_income: Optional[Series] = None
    total_assets: Optional[Series] = None
    total_liabilities: Optional[Series] = None
    shareholders_equity: Optional[Series] = None
    extra: Mapping[str, Series] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # extra is exposed read-only
        object.__setattr__(self, 'extra', MappingProxyType(dict(self.extra)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Sequence[float]]) -> 'FinancialData':
        """Build from a label -> values mapping such as {"Revenue": [...]}."""
        standard = {}
        extra = {}
        for label, values in data.items():
            if label in STANDARD_SERIES:
                standard[STANDARD_SERIES[label]] = _to_series(values)
            elif values is not None:
                extra[label] = _to_series(values)
        return cls(extra=extra, **standard)

    def has_series(self, label: str) -> bool:
        if label in STANDARD_SERIES:
            return getattr(self, STANDARD_SERIES[label]) is not None
        return label in self.extra

    def series(self, label: str) -> Series:
        """Return the series for a label; absent series read as empty."""
        if label in STANDARD_SERIES:
            values = getattr(self, STANDARD_SERIES[label])
        else:
            values = self.extra.get(label)
        return values if values is not None else ()

    def labels(self) -> List[str]:
        present = [label for label in STANDARD_SERIES if self.has_series(label)]
        return present + list(self.extra.keys())

    def items(self) -> List[Tuple[str, Series]]:
        return [(label, self.series(label)) for label in self.labels()]

    def to_dict(self) -> Dict[str, List[float]]:
        return {label: list(values) for label, values in self.items()}


@dataclass(frozen=True)
class Company:
    """One portfolio member: identity, industry key and its financial series."""
    id: str
    name: str
    industry: str
    financial_data: FinancialData = field(default_factory=FinancialData)
    market_cap: Optional[float] = None
    last_updated: Optional[datetime] = None

    def series(self, label: str) -> Series:
        return self.financial_data.series(label)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'industry': self.industry,
            'market_cap': self.market_cap,
            'last_updated': self.last_updated.isoformat() if self.last_updated else None,
            'financial_data': self.financial_data.to_dict(),
        }


@dataclass
class TopPerformer:
    company: str
    metric: str
    value: float
    rank: int


@dataclass
class Underperformer:
    company: str
    issue: str
    severity: str
    recommendation: str


@dataclass
class IndustrySummary:
    count: int = 0
    weighted_value: float = 0.0
    avg_metrics: Dict[str, float] = field(default_factory=dict)


@dataclass
class RiskMetrics:
    portfolio_volatility: float
    correlation_matrix: Dict[str, Dict[str, float]]
    diversification_ratio: float
    concentration_risk: float
    volatilities: Dict[str, float]


@dataclass
class PerformanceMetrics:
    weighted_average_roe: float
    weighted_average_roa: float
    portfolio_growth_rate: float
    risk_adjusted_return: float


@dataclass
class PortfolioMetrics:
    """Risk, performance, comparative and industry results for one portfolio."""
    # Risk
    portfolio_volatility: float
    correlation_matrix: Dict[str, Dict[str, float]]
    diversification_ratio: float
    concentration_risk: float
    volatilities: Dict[str, float]

    # Performance
    weighted_average_roe: float
    weighted_average_roa: float
    portfolio_growth_rate: float
    risk_adjusted_return: float

    # Totals of latest values
    total_revenue: float = 0.0
    total_net_income: float = 0.0

    # Comparative analysis
    top_performers: List[TopPerformer] = field(default_factory=list)
    underperformers: List[Underperformer] = field(default_factory=list)

    industry_breakdown: Dict[str, IndustrySummary] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MetricBenchmark:
    value: float
    percentile: float
    industry_average: float
    best_in_class: float
    gap: float
    trend: str


@dataclass
class BenchmarkingResult:
    """Peer comparison of one company against its industry."""
    company: str
    company_id: str
    metrics: Dict[str, MetricBenchmark]
    overall_rank: int
    total_companies: int
    strength_areas: List[str] = field(default_factory=list)
    improvement_areas: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CompanyTrend:
    values: List[float]
    trend: str
    volatility: float
    forecast: List[float]
    confidence: float


@dataclass
class IndustryTrend:
    average: List[float] = field(default_factory=list)
    median: List[float] = field(default_factory=list)
    top_quartile: List[float] = field(default_factory=list)
    bottom_quartile: List[float] = field(default_factory=list)


@dataclass
class TrendAnalysis:
    """Trend records for one metric across the portfolio."""
    metric: str
    companies: Dict[str, CompanyTrend]
    industry_trend: IndustryTrend

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
