from changup.schemas.simulate import ROISimRequest, ROISimResponse

NO_PAYBACK = 999


def simulate_roi(req: ROISimRequest) -> ROISimResponse:
    cogs = int(req.monthly_sales * req.cogs_rate)
    opex = req.rent + req.labor + req.other_cost + cogs
    profit = req.monthly_sales - opex
    margin = (profit / req.monthly_sales) if req.monthly_sales else 0.0
    payback = max(1, int(req.capex / profit)) if profit > 0 else NO_PAYBACK
    roi = profit * 12 / req.capex * 100
    return ROISimResponse(
        monthly_profit=profit,
        payback_month=payback,
        margin_rate=round(margin, 3),
        roi_percent=round(roi, 1),
    )
