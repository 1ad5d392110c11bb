# changup/schemas/summary.py
# -----------------------------------------------------------------------------
# AI 창업 분석 요약 스키마
# - 입력: 분석/시뮬레이션에서 나온 점수들 (모두 선택)
# - 출력: LLM 모드와 템플릿 모드 동일 형태
# -----------------------------------------------------------------------------
from typing import List, Literal, Optional

from changup.schemas.analysis import CamelModel


class SummaryRequest(CamelModel):
    biz_type: Optional[str] = None
    area_name: Optional[str] = None
    risk_score: Optional[float] = None  # 0~100, 낮을수록 안전
    roi: Optional[float] = None  # %
    bep: Optional[int] = None  # 개월
    competition_score: Optional[float] = None  # 0~100, 높을수록 경쟁 낮음
    regulation_grade: Optional[str] = None
    close_rate: Optional[float] = None
    survival_rate: Optional[float] = None


class RiskItem(CamelModel):
    level: Literal["high", "mid", "low"]
    title: str
    desc: str


class StrategyItem(CamelModel):
    title: str
    desc: str


class SummaryResult(CamelModel):
    summary: str
    risks: List[RiskItem]
    strategies: List[StrategyItem]
    risk_level: str
    roi_grade: str
    is_mock: bool
    note: Optional[str] = None
