# changup/services/mailer.py
# -----------------------------------------------------------------------------
# 분석 결과 리포트 메일 (Resend API)
# - 수신자/업종명 검증 → HTML 렌더링(Jinja2, autoescape) → 발송
# -----------------------------------------------------------------------------
from __future__ import annotations

import re
from typing import Optional

import httpx
from jinja2 import Environment
from loguru import logger

from changup.core.config import Settings
from changup.core.errors import (
    ChangupError,
    ConfigurationMissing,
    UpstreamRejected,
    ValidationError,
)
from changup.schemas.mail import ReportEmailRequest, ReportEmailResult

EMAIL_RE = re.compile(r"^[^@]+@[^@]+\.[^@]+$")
SITE_URL = "https://changup-map.netlify.app"

GRADE_EMOJI = {"안전": "🟢", "주의": "🟡", "위험": "🔴"}

_env = Environment(autoescape=True)

REPORT_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html lang="ko">
<head><meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1.0"></head>
<body style="margin:0;padding:0;background:#f1f5f9;font-family:-apple-system,BlinkMacSystemFont,'Noto Sans KR',sans-serif;">
  <div style="max-width:600px;margin:32px auto;background:#fff;border-radius:16px;overflow:hidden;">
    <div style="background:linear-gradient(135deg,#1b2a4a 0%,#1e3a5f 100%);padding:32px 28px;text-align:center;">
      <div style="font-size:32px;margin-bottom:8px;">🧭</div>
      <h1 style="color:#fff;font-size:22px;font-weight:900;margin:0 0 6px;">창업지도 분석 결과</h1>
      <p style="color:rgba(255,255,255,0.6);font-size:13px;margin:0;">계약 전 5분 보증금 보호 검증 리포트</p>
    </div>
    <div style="padding:32px 28px;">
      <div style="background:#f8fafc;border-radius:10px;padding:16px 20px;margin-bottom:20px;border-left:4px solid #dc2626;">
        <div style="font-size:13px;color:#64748b;margin-bottom:4px;">분석 대상</div>
        <div style="font-size:18px;font-weight:800;color:#0f172a;">{{ biz_name }} · {{ area_name or '지역 미지정' }}</div>
      </div>
      <div style="background:#f8fafc;border-radius:12px;padding:24px;text-align:center;margin-bottom:20px;">
        <div style="font-size:11px;font-weight:700;color:#94a3b8;letter-spacing:1px;margin-bottom:8px;">종합 창업 안전 점수</div>
        <div style="font-size:64px;font-weight:900;color:{{ score_color }};line-height:1;">{{ score_text }}</div>
        <div style="font-size:16px;font-weight:700;color:{{ score_color }};margin-top:6px;">{{ grade_emoji }} {{ grade or '--' }}</div>
      </div>
      <div style="margin-bottom:24px;">
        <h3 style="font-size:15px;font-weight:800;color:#0f172a;margin:0 0 12px;">⚠️ 계약 전 확인 필수 리스크</h3>
        <ul style="margin:0;padding-left:20px;line-height:1.9;">
        {%- for risk in risks %}
          <li style="margin-bottom:8px;color:#475569;">{{ risk }}</li>
        {%- else %}
          <li style="color:#94a3b8;">주요 리스크 항목 없음</li>
        {%- endfor %}
        </ul>
      </div>
      <div style="background:#fef2f2;border:1px solid #fecaca;border-radius:12px;padding:20px;text-align:center;margin-bottom:20px;">
        <div style="font-size:14px;font-weight:800;color:#991b1b;margin-bottom:8px;">계약 후에는 돌이킬 수 없습니다</div>
        <div style="font-size:13px;color:#b45309;margin-bottom:16px;">정밀 PDF 리포트로 계약서 제출용 근거 자료를 확보하세요.</div>
        <a href="{{ site_url }}" style="display:inline-block;background:#dc2626;color:#fff;text-decoration:none;border-radius:8px;padding:12px 28px;font-weight:700;font-size:14px;">정밀 리포트 받기 (29,000원) →</a>
      </div>
      <div style="text-align:center;padding-top:16px;border-top:1px solid #f1f5f9;">
        <p style="font-size:12px;color:#94a3b8;margin:0 0 4px;">창업지도 · changup-map.netlify.app</p>
        <p style="font-size:11px;color:#cbd5e1;margin:0;">본 분석 결과는 참고용이며 법적 효력이 없습니다.</p>
      </div>
    </div>
  </div>
</body>
</html>"""
)


def score_color(score: Optional[float]) -> str:
    if score is None:
        return "#dc2626"
    if score >= 70:
        return "#16a34a"
    if score >= 50:
        return "#d97706"
    return "#dc2626"


def _score_text(score: Optional[float]) -> str:
    if score is None:
        return "--"
    return f"{score:g}"


def validate(req: ReportEmailRequest) -> None:
    if not req.to or not EMAIL_RE.match(req.to):
        raise ValidationError("유효한 이메일 주소가 필요합니다.")
    if not req.biz_name:
        raise ValidationError("업종명이 필요합니다.")


def render_report(req: ReportEmailRequest) -> str:
    return REPORT_TEMPLATE.render(
        biz_name=req.biz_name,
        area_name=req.area_name,
        score_text=_score_text(req.score),
        score_color=score_color(req.score),
        grade=req.grade,
        grade_emoji=GRADE_EMOJI.get(req.grade or "", "⚠️"),
        risks=req.risks,
        site_url=SITE_URL,
    )


def build_subject(req: ReportEmailRequest) -> str:
    emoji = GRADE_EMOJI.get(req.grade or "", "⚠️")
    area = f" {req.area_name}" if req.area_name else ""
    return (
        f"[창업지도] {req.biz_name}{area} 분석 결과 — "
        f"점수 {_score_text(req.score)}점 {emoji}{req.grade or ''}"
    )


async def send_report(
    req: ReportEmailRequest, *, client: httpx.AsyncClient, settings: Settings
) -> ReportEmailResult:
    validate(req)
    if not settings.RESEND_API_KEY:
        logger.error("[mail] RESEND_API_KEY 미설정")
        raise ConfigurationMissing(
            "이메일 서비스가 설정되지 않았습니다. RESEND_API_KEY 환경 변수를 설정해주세요."
        )

    payload = {
        "from": f"창업지도 <{settings.SEND_FROM_EMAIL}>",
        "to": [req.to],
        "subject": build_subject(req),
        "html": render_report(req),
    }
    try:
        r = await client.post(
            settings.RESEND_API_URL,
            headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
            json=payload,
            timeout=settings.UPSTREAM_TIMEOUT_S,
        )
        data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"[mail] Resend 호출 실패: {type(e).__name__}")
        raise ChangupError("메일 발송 서버 오류가 발생했습니다.") from e

    if r.is_success and isinstance(data, dict) and data.get("id"):
        logger.info(f"[mail] 발송 완료 id={data['id']}")
        return ReportEmailResult(id=str(data["id"]))

    message = None
    if isinstance(data, dict):
        message = data.get("message") or data.get("name")
    logger.warning(f"[mail] Resend 거절 status={r.status_code} {message}")
    raise UpstreamRejected(message or "이메일 발송에 실패했습니다.")
