"""
Portfolio concentration calculation utilities.
Pure functions for weights and Herfindahl concentration.
"""

from typing import Dict, Iterable, Mapping


def equal_weights(company_ids: Iterable[str]) -> Dict[str, float]:
    """
    Assign every company the same weight.

    Args:
        company_ids: Company identifiers

    Returns:
        Dictionary mapping company ids to 1/N (empty for no companies)
    """
    ids = list(company_ids)
    if not ids:
        return {}

    weight = 1.0 / len(ids)
    return {company_id: weight for company_id in ids}


def herfindahl_index(weights: Mapping[str, float]) -> float:
    """
    Calculate Herfindahl-Hirschman Index (HHI) over portfolio weights.

    HHI = Σ(w_i²)

    With equal weights this is 1/N. Non-equal weights need no change here.

    Args:
        weights: Dictionary mapping company ids to weights

    Returns:
        HHI as decimal (1/N = evenly spread, 1 = single company),
        0.0 for an empty portfolio
    """
    hhi = 0.0
    for weight in weights.values():
        hhi += weight ** 2

    return hhi


def concentration_interpretation(hhi: float) -> str:
    """
    Provide interpretation of HHI value.

    Args:
        hhi: Herfindahl-Hirschman Index value

    Returns:
        String interpretation of concentration level
    """
    if hhi is None or hhi <= 0:
        return "No data"
    elif hhi < 0.15:
        return "Low concentration (well diversified)"
    elif hhi <= 0.5:
        return "Moderate concentration"
    else:
        return "High concentration"
