# changup/services/summary.py
# -----------------------------------------------------------------------------
# AI 창업 분석 요약
# - ANTHROPIC_KEY 설정 시 Claude Messages API 호출 → 응답의 JSON 블록 파싱
# - 키 미설정/호출 실패/파싱 실패 시 템플릿 조합으로 폴백
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Optional

import anthropic
from loguru import logger

from changup.core.config import Settings
from changup.schemas.summary import RiskItem, StrategyItem, SummaryRequest, SummaryResult

MOCK_NOTE = "본 리포트는 공공 데이터 기반 시뮬레이션이며, 실제 상권 상황에 따라 다를 수 있습니다."
JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True, slots=True)
class BizContext:
    vc: float  # 변동비율
    category: str
    peak_hour: str
    labor_intensity: str
    main_cost: str


BIZ_CONTEXT: dict[str, BizContext] = {
    "카페": BizContext(0.35, "음식", "오전·오후", "중간", "원두·임대료"),
    "고깃집": BizContext(0.45, "음식", "저녁·주말", "높음", "식재료·인건비"),
    "치킨집": BizContext(0.42, "음식", "저녁", "낮음", "식재료·배달수수료"),
    "편의점": BizContext(0.65, "소매", "상시", "높음", "상품원가·인건비"),
    "헬스장": BizContext(0.15, "건강", "아침·저녁", "중간", "임대료·인건비"),
    "미용실": BizContext(0.30, "뷰티", "주말", "높음", "재료비·임대료"),
    "학원": BizContext(0.15, "교육", "오후·저녁", "높음", "인건비·임대료"),
    "노래방": BizContext(0.20, "여가", "저녁·심야", "낮음", "임대료·전기료"),
    "분식집": BizContext(0.40, "음식", "점심", "중간", "식재료·임대료"),
    "베이커리": BizContext(0.38, "음식", "오전·오후", "높음", "식재료·인건비"),
}
DEFAULT_CONTEXT = BizContext(0.35, "일반", "상시", "중간", "임대료")


def risk_level(score: float) -> tuple[str, str]:
    if score >= 70:
        return "높음", "🔴"
    if score >= 40:
        return "보통", "🟡"
    return "낮음", "🟢"


def roi_level(roi: float) -> tuple[str, str]:
    if roi >= 30:
        return "우수", "🟢"
    if roi >= 10:
        return "보통", "🟡"
    if roi >= 0:
        return "저조", "🔴"
    return "손실", "⛔"


def _competition_sentence(score: float) -> str:
    if score >= 70:
        return "경쟁 강도가 낮아 진입 여건이 유리합니다."
    if score >= 40:
        return "경쟁 업소가 적정 수준입니다."
    return "경쟁이 치열한 상권으로 차별화 전략이 필요합니다."


def _permit_risk(grade: Optional[str], ctx: BizContext) -> RiskItem:
    if grade == "불가":
        return RiskItem(
            level="high",
            title="인허가 리스크",
            desc="용도지역 문제로 해당 위치에서 영업이 불가할 수 있습니다. 계약 전 반드시 관할 구청에 확인하세요.",
        )
    if grade == "주의":
        return RiskItem(
            level="mid",
            title="인허가 리스크",
            desc="해당 지역은 일부 업종 인허가 제한이 있습니다. 사전 담당 부서 문의가 필요합니다.",
        )
    return RiskItem(
        level="low",
        title="인허가 리스크",
        desc=f"{ctx.category} 분야 인허가 절차를 행정가이드 탭에서 확인하고 일정을 미리 계획하세요.",
    )


def compose_summary(req: SummaryRequest) -> SummaryResult:
    """키/모델 없이 점수 구간별 문구를 조합한 결정적 요약."""
    ctx = BIZ_CONTEXT.get(req.biz_type or "", DEFAULT_CONTEXT)
    risk_score = req.risk_score or 50
    risk_label, risk_emoji = risk_level(risk_score)
    roi_label, roi_emoji = roi_level(req.roi or 0)
    area = req.area_name or "해당 지역"
    bt = req.biz_type or "업종"

    parts = [f"{area} {bt} 창업을 분석한 결과, 전반적인 위험도는 **{risk_label}({risk_emoji})** 수준입니다."]
    if req.roi is not None:
        parts.append(
            f"예상 ROI는 **{req.roi:.1f}%({roi_emoji} {roi_label})**이며, "
            f"BEP(손익분기) 달성까지 약 **{req.bep}개월**이 소요될 것으로 추정됩니다."
        )
    if req.competition_score is not None:
        parts.append(_competition_sentence(req.competition_score))
    if req.close_rate is not None:
        tail = (
            "업계 평균 대비 높아 각별한 주의가 필요합니다"
            if req.close_rate > 20
            else "비교적 안정적인 수준입니다"
        )
        parts.append(f"동종 업종 폐업률은 {req.close_rate:g}%로, {tail}.")

    risks = [
        RiskItem(
            level="high" if risk_score >= 50 else "mid",
            title="임대료 부담",
            desc=f"{bt} 특성상 {ctx.peak_hour} 집중 매출 구조입니다. 월 임대료가 예상 매출의 25% 이하인지 반드시 확인하세요.",
        )
    ]
    if req.competition_score is not None and req.competition_score < 50:
        risks.append(
            RiskItem(
                level="high",
                title="경쟁 포화",
                desc="반경 500m 내 동종 업소가 밀집해 있습니다. 메뉴·서비스·인테리어 차별화 없이는 생존이 어려울 수 있습니다.",
            )
        )
    else:
        risks.append(
            RiskItem(
                level="mid",
                title="수익성 관리",
                desc=f"{bt}의 변동비율은 약 {round(ctx.vc * 100)}%입니다. {ctx.main_cost} 비용 절감이 수익성의 핵심입니다.",
            )
        )
    risks.append(_permit_risk(req.regulation_grade, ctx))

    if req.bep and req.bep <= 24:
        first = StrategyItem(
            title="초기 고정비 최소화 전략",
            desc=f"BEP {req.bep}개월 달성을 위해 초기 인테리어를 최소화하고 보증금보다 월세 절감에 집중하세요. "
            "스몰 스타트 후 수익 확인 후 확장하는 방식을 권장합니다.",
        )
    else:
        first = StrategyItem(
            title="수익 다각화 전략",
            desc=f"BEP 달성까지 {req.bep or '다수'}개월이 예상됩니다. "
            "배달·테이크아웃·온라인 판매 등 추가 수익 채널을 개설하여 매출 기반을 다양화하세요.",
        )
    strategies = [
        first,
        StrategyItem(
            title="소상공인 정책 자금 활용",
            desc="소상공인진흥공단의 창업패키지(최대 1억원 지원) 및 시중은행 특별보증 상품을 활용하면 "
            "초기 투자 부담을 줄일 수 있습니다. 행정가이드 탭에서 자세한 정보를 확인하세요.",
        ),
    ]

    return SummaryResult(
        summary=" ".join(parts),
        risks=risks,
        strategies=strategies,
        risk_level=risk_label,
        roi_grade=roi_label,
        is_mock=True,
        note=MOCK_NOTE,
    )


def _fmt(v: object, fallback: str = "?") -> str:
    return fallback if v is None or v == "" else str(v)


def build_prompt(req: SummaryRequest) -> str:
    roi = f"{req.roi:.1f}" if req.roi is not None else "?"
    return f"""당신은 대한민국 소상공인 창업 전문가입니다. 다음 데이터를 바탕으로 창업 분석 리포트를 작성해주세요.

업종: {_fmt(req.biz_type, '미입력')}
지역: {_fmt(req.area_name, '미입력')}
위험도 점수: {_fmt(req.risk_score)}/100 (낮을수록 안전)
예상 ROI: {roi}%
BEP 달성: {_fmt(req.bep)}개월
경쟁 점수: {_fmt(req.competition_score)}/100 (높을수록 경쟁 낮음)
용도지역: {_fmt(req.regulation_grade, '확인필요')}
동종업종 폐업률: {_fmt(req.close_rate)}%
생존율: {_fmt(req.survival_rate)}%

다음 JSON 형식으로 응답해주세요:
{{
  "summary": "2~3문장 핵심 요약",
  "risks": [{{"level":"high|mid|low","title":"리스크명","desc":"설명"}}] (3개),
  "strategies": [{{"title":"전략명","desc":"설명"}}] (2개)
}}"""


def parse_llm_reply(text: str, req: SummaryRequest) -> Optional[SummaryResult]:
    """응답 텍스트에서 첫 JSON 블록을 꺼내 SummaryResult로. 실패 시 None."""
    match = JSON_BLOCK_RE.search(text or "")
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
        return SummaryResult(
            summary=data["summary"],
            risks=data["risks"],
            strategies=data["strategies"],
            risk_level=risk_level(req.risk_score or 50)[0],
            roi_grade=roi_level(req.roi or 0)[0],
            is_mock=False,
        )
    except (ValueError, KeyError, TypeError):
        return None


async def _ask_llm(req: SummaryRequest, settings: Settings) -> Optional[SummaryResult]:
    try:
        async with anthropic.AsyncAnthropic(
            api_key=settings.ANTHROPIC_KEY, timeout=settings.LLM_TIMEOUT_S, max_retries=0
        ) as client:
            resp = await client.messages.create(
                model=settings.ANTHROPIC_MODEL,
                max_tokens=1024,
                messages=[{"role": "user", "content": build_prompt(req)}],
            )
    except anthropic.APIError as e:
        logger.warning(f"[summary] LLM 호출 실패: {type(e).__name__}")
        return None

    parts = []
    for block in resp.content:
        text = getattr(block, "text", None)
        if text:
            parts.append(text)
    result = parse_llm_reply("\n".join(parts), req)
    if result is None:
        logger.warning("[summary] LLM 응답 JSON 파싱 실패 → 템플릿 폴백")
    return result


async def summarize(req: SummaryRequest, *, settings: Settings) -> SummaryResult:
    if settings.ANTHROPIC_KEY:
        result = await _ask_llm(req, settings)
        if result is not None:
            return result
    return compose_summary(req)
