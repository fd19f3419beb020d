"""
Tests for raw company record validators.
Pure function tests - no IO.
"""

import pytest

from ingestion.transforms.validators import (
    ValidationError,
    financial_data_key,
    validate_series,
    validate_company_record,
)


def valid_record(**overrides):
    record = {
        'id': 'company-1',
        'name': 'Tech Innovations Inc.',
        'industry': 'Technology',
        'marketCap': 50000000000,
        'financialData': {
            'Revenue': [10000000, 12000000],
            'Net Income': [1000000, 1500000],
        },
    }
    record.update(overrides)
    return record


class TestValidateSeries:
    """Tests for validate_series."""

    def test_valid_series(self):
        validate_series('c1', 'Revenue', [1, 2.5, -3])
        validate_series('c1', 'Revenue', [])

    def test_not_a_list(self):
        with pytest.raises(ValidationError, match="must be a list"):
            validate_series('c1', 'Revenue', 100)

    def test_non_numeric(self):
        with pytest.raises(ValidationError, match="period 1 must be numeric"):
            validate_series('c1', 'Revenue', [1, '2'])

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be numeric"):
            validate_series('c1', 'Revenue', [True])

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="c1 'Revenue' period 0 must be finite"):
            validate_series('c1', 'Revenue', [float('nan')])

    def test_inf_rejected(self):
        with pytest.raises(ValidationError, match="must be finite"):
            validate_series('c1', 'Revenue', [1, float('inf')])

    def test_empty_label(self):
        with pytest.raises(ValidationError, match="label"):
            validate_series('c1', '', [1])


class TestValidateCompanyRecord:
    """Tests for validate_company_record."""

    def test_valid_record(self):
        validate_company_record(valid_record())

    def test_snake_case_keys(self):
        record = valid_record()
        record['financial_data'] = record.pop('financialData')
        record['market_cap'] = record.pop('marketCap')

        validate_company_record(record)
        assert financial_data_key(record) == 'financial_data'

    def test_not_a_dict(self):
        with pytest.raises(ValidationError, match="must be dict"):
            validate_company_record(['company-1'])

    def test_missing_keys(self):
        with pytest.raises(ValidationError, match="Missing required keys"):
            validate_company_record({'id': 'c1'})

    def test_missing_financial_data(self):
        record = valid_record()
        del record['financialData']

        with pytest.raises(ValidationError, match="financialData"):
            validate_company_record(record)

    def test_id_must_be_string(self):
        with pytest.raises(ValidationError, match="id must be string"):
            validate_company_record(valid_record(id=1))

    def test_empty_id(self):
        with pytest.raises(ValidationError, match="non-empty"):
            validate_company_record(valid_record(id=''))

    def test_market_cap_optional(self):
        record = valid_record()
        del record['marketCap']

        validate_company_record(record)
        validate_company_record(valid_record(marketCap=None))

    def test_market_cap_numeric(self):
        with pytest.raises(ValidationError, match="marketCap must be numeric"):
            validate_company_record(valid_record(marketCap='50B'))

    def test_market_cap_finite(self):
        with pytest.raises(ValidationError, match="marketCap must be finite"):
            validate_company_record(valid_record(marketCap=float('inf')))

    def test_financial_data_must_be_dict(self):
        with pytest.raises(ValidationError, match="financialData must be dict"):
            validate_company_record(valid_record(financialData=[1, 2]))

    def test_null_series_allowed(self):
        validate_company_record(valid_record(financialData={'Revenue': None}))

    def test_bad_series_reported_with_company(self):
        with pytest.raises(ValidationError, match="company-1 'Revenue'"):
            validate_company_record(valid_record(financialData={'Revenue': [1, None]}))
