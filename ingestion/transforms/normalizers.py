"""
Normalizers for transforming caller data to Company records.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

import logging
from datetime import datetime
from typing import Dict, Any, List, Optional

import pandas as pd

from analysis.models import Company, FinancialData
from ingestion.transforms.validators import validate_company_record, financial_data_key

logger = logging.getLogger(__name__)


FRAME_COLUMNS = ['company_id', 'company_name', 'industry', 'metric', 'period', 'value']


class NormalizationError(Exception):
    """Raised when records cannot be turned into companies."""
    pass


def _parse_timestamp(raw: Any) -> Optional[datetime]:
    if raw is None or isinstance(raw, datetime):
        return raw
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError:
        raise NormalizationError(f"Invalid lastUpdated timestamp: {raw!r}")


def normalize_company_record(record: Dict[str, Any]) -> Company:
    """
    Transform one raw record into a Company.

    Accepts the camelCase keys used by the presentation layer
    (financialData, marketCap, lastUpdated) and their snake_case forms.

    Raises:
        ValidationError: If the record fails validation
        NormalizationError: If a timestamp cannot be parsed
    """
    validate_company_record(record)

    market_cap = record.get('marketCap', record.get('market_cap'))

    return Company(
        id=record['id'],
        name=record['name'],
        industry=record['industry'],
        financial_data=FinancialData.from_mapping(record[financial_data_key(record)]),
        market_cap=float(market_cap) if market_cap is not None else None,
        last_updated=_parse_timestamp(record.get('lastUpdated', record.get('last_updated'))),
    )


def companies_from_records(records: List[Dict[str, Any]]) -> List[Company]:
    """
    Transform a list of raw records, preserving order.

    Raises:
        NormalizationError: If two records share an id
    """
    companies = []
    seen_ids = set()

    for record in records:
        company = normalize_company_record(record)
        if company.id in seen_ids:
            raise NormalizationError(f"Duplicate company id: {company.id}")
        seen_ids.add(company.id)
        companies.append(company)

    logger.debug(f"Normalized {len(companies)} company records")
    return companies


def companies_from_frame(df: pd.DataFrame) -> List[Company]:
    """
    Build companies from a long-format table, one row per value.

    Required columns: company_id, company_name, industry, metric, period, value.
    Optional column: market_cap (first non-null value per company).

    Values are ordered by period ascending within each company/metric.
    Companies keep the order of their first row.

    Raises:
        NormalizationError: If required columns are missing or a company
            has conflicting name/industry rows
    """
    missing = set(FRAME_COLUMNS) - set(df.columns)
    if missing:
        raise NormalizationError(f"Missing required columns: {sorted(missing)}")

    if df.empty:
        return []

    companies = []
    for company_id, group in df.groupby('company_id', sort=False):
        names = group['company_name'].unique()
        industries = group['industry'].unique()
        if len(names) != 1 or len(industries) != 1:
            raise NormalizationError(f"Conflicting name/industry rows for company {company_id}")

        series = {}
        for metric, metric_rows in group.groupby('metric', sort=False):
            ordered = metric_rows.sort_values('period', kind='mergesort')
            series[str(metric)] = ordered['value'].astype(float).tolist()

        record = {
            'id': str(company_id),
            'name': str(names[0]),
            'industry': str(industries[0]),
            'financialData': series,
        }

        if 'market_cap' in group.columns:
            caps = group['market_cap'].dropna()
            if not caps.empty:
                record['marketCap'] = float(caps.iloc[0])

        companies.append(normalize_company_record(record))

    logger.debug(f"Normalized {len(companies)} companies from {len(df)} rows")
    return companies
