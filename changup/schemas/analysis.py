# changup/schemas/analysis.py
# -----------------------------------------------------------------------------
# 상권 분석 스키마
# - 응답 JSON은 camelCase (alias), 파이썬 속성은 snake_case
# - 업스트림 원문 구조는 services 계층에서만 다루고 여기로는 정제된 값만 들어옴
# -----------------------------------------------------------------------------
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RegulationGrade = Literal["최적", "양호", "주의", "불가", "확인필요"]
CompetitionLevel = Literal["데이터없음", "낮음", "보통", "높음", "매우높음"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisQuery(CamelModel):
    latitude: float
    longitude: float
    business_type: Optional[str] = None
    radius_meters: int = 500


class Location(CamelModel):
    lat: float
    lng: float


class NearbyStore(CamelModel):
    name: Optional[str] = None
    category: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class CategoryCount(CamelModel):
    name: str
    count: int


class StoreSnapshot(CamelModel):
    total_count: int = 0
    nearby_stores: List[NearbyStore] = Field(default_factory=list)
    competition_map: Dict[str, int] = Field(default_factory=dict)
    top_categories: List[CategoryCount] = Field(default_factory=list)
    same_type_count: int = 0


class Regulation(CamelModel):
    can_operate: bool
    warning: Optional[str] = None
    grade: RegulationGrade


class LandUseSnapshot(CamelModel):
    zone_type: Optional[str] = None
    zone_code: Optional[str] = None
    regulation: Regulation


class TradeAreaSnapshot(CamelModel):
    trade_area_name: Optional[str] = None
    trade_area_code: Optional[str] = None


class SalesSnapshot(CamelModel):
    avg_monthly_sales: Optional[int] = None  # 만원 단위
    avg_business_age_years: Optional[float] = None
    close_rate_percent: Optional[float] = None


class TrendSnapshot(CamelModel):
    total_in_category: int = 0
    open_count: int = 0
    close_count: int = 0
    survival_rate_percent: Optional[int] = None


class AnalysisSummary(CamelModel):
    total_stores_nearby: int
    competition_level: CompetitionLevel
    competition_score: int = Field(ge=0, le=100)
    regulation_grade: RegulationGrade
    can_operate: bool
    regulation_warning: Optional[str] = None
    close_risk_bonus: int = 0


class AnalysisResult(CamelModel):
    success: bool = True
    location: Location
    biz_type: Optional[str] = None
    stores: StoreSnapshot
    landuse: LandUseSnapshot
    trade_area: TradeAreaSnapshot
    sales: Optional[SalesSnapshot] = None
    trend: Optional[TrendSnapshot] = None
    analysis: AnalysisSummary
    timestamp: str
