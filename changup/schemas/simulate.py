from pydantic import BaseModel, Field


class ROISimRequest(BaseModel):
    monthly_sales: int = Field(ge=0)
    rent: int = Field(ge=0)
    cogs_rate: float = Field(0.35, ge=0, le=1)
    labor: int = 3000000
    other_cost: int = 500000
    capex: int = Field(30000000, gt=0)  # 인테리어 + 권리금 + 보증금


class ROISimResponse(BaseModel):
    monthly_profit: int
    payback_month: int  # BEP(개월), 적자면 999
    margin_rate: float
    roi_percent: float  # 연간 순이익 / 초기 투자
