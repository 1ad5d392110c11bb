# tests/test_roi.py
import pytest
from pydantic import ValidationError

from changup.schemas.simulate import ROISimRequest
from changup.services.roi import NO_PAYBACK, simulate_roi


def test_profitable_store():
    res = simulate_roi(
        ROISimRequest(monthly_sales=10_000_000, rent=1_000_000, cogs_rate=0.25, labor=2_000_000, other_cost=500_000, capex=40_000_000)
    )
    assert res.monthly_profit == 4_000_000
    assert res.payback_month == 10
    assert res.margin_rate == 0.4
    assert res.roi_percent == 120.0


def test_loss_has_no_payback():
    res = simulate_roi(ROISimRequest(monthly_sales=1_000_000, rent=2_000_000))
    assert res.monthly_profit < 0
    assert res.payback_month == NO_PAYBACK
    assert res.roi_percent < 0


def test_zero_sales_margin():
    res = simulate_roi(ROISimRequest(monthly_sales=0, rent=0, labor=0, other_cost=0))
    assert res.monthly_profit == 0
    assert res.margin_rate == 0.0
    assert res.payback_month == NO_PAYBACK


def test_capex_must_be_positive():
    with pytest.raises(ValidationError):
        ROISimRequest(monthly_sales=1, rent=1, capex=0)
