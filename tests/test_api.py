# tests/test_api.py
# -----------------------------------------------------------------------------
# HTTP 계층: 상태코드, 에러 본문, camelCase 응답, CORS/OPTIONS, 부가 엔드포인트
# -----------------------------------------------------------------------------
import base64
import json

import httpx

from samples import all_routes


# ── /api/analyze ─────────────────────────────────────────────────────────────
def test_analyze_missing_location_is_400_without_upstream_calls(api, upstream):
    r = api.get("/api/analyze", params={"lng": "127.0", "bizType": "카페"})
    assert r.status_code == 400
    assert r.json() == {"error": "위치 정보(lat, lng)가 필요합니다"}
    assert upstream.calls == []


def test_analyze_bad_coordinate_is_400(api, upstream):
    r = api.get("/api/analyze", params={"lat": "north", "lng": "127.0"})
    assert r.status_code == 400
    assert "error" in r.json()
    assert upstream.calls == []


def test_analyze_response_shape(api, upstream):
    upstream.routes.update(all_routes())
    r = api.get("/api/analyze", params={"lat": "37.5665", "lng": "126.978", "bizType": "치킨"})
    assert r.status_code == 200
    body = r.json()

    assert body["success"] is True
    assert body["bizType"] == "치킨"
    assert body["location"] == {"lat": 37.5665, "lng": 126.978}
    assert body["stores"]["totalCount"] == 6
    assert body["stores"]["sameTypeCount"] == 3
    assert body["stores"]["topCategories"][0] == {"name": "치킨", "count": 3}
    assert body["stores"]["competitionMap"]["한식"] == 2
    assert body["stores"]["nearbyStores"][0]["name"] == "을지로식당"
    assert body["landuse"]["zoneType"] == "일반상업지역"
    assert body["landuse"]["regulation"]["canOperate"] is True
    assert body["tradeArea"] == {"tradeAreaName": "을지로3가역", "tradeAreaCode": "1001496"}
    assert body["sales"]["avgMonthlySales"] == 4568
    assert body["trend"]["survivalRatePercent"] == 75
    assert body["analysis"] == {
        "totalStoresNearby": 6,
        "competitionLevel": "낮음",
        "competitionScore": 80,
        "regulationGrade": "최적",
        "canOperate": True,
        "regulationWarning": None,
        "closeRiskBonus": 10,
    }
    assert body["timestamp"]


def test_analyze_all_upstreams_down_is_still_200(api, upstream):
    upstream.routes.update(
        {
            "storeListInRadius": httpx.Response(503),
            "/req/data": httpx.ConnectError("down"),
            "trdarList": httpx.Response(502),
            "storeListInUpjong": httpx.Response(500),
        }
    )
    r = api.get("/api/analyze", params={"lat": "37.5", "lng": "127.0"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["bizType"] is None
    assert body["stores"]["totalCount"] == 0
    assert body["sales"] is None
    assert body["analysis"]["competitionLevel"] == "데이터없음"
    assert body["analysis"]["regulationGrade"] == "확인필요"


def test_options_preflight_without_body(api):
    r = api.options("/api/analyze")
    assert r.status_code == 204
    assert r.content == b""


def test_cors_preflight(api):
    r = api.options(
        "/api/analyze",
        headers={"Origin": "https://example.org", "Access-Control-Request-Method": "GET"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_cors_header_on_simple_request(api, upstream):
    upstream.routes.update(all_routes())
    r = api.get(
        "/api/analyze",
        params={"lat": "37.5", "lng": "127.0"},
        headers={"Origin": "https://example.org"},
    )
    assert r.headers["access-control-allow-origin"] == "*"


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


# ── /api/address ─────────────────────────────────────────────────────────────
def test_address_requires_keyword(api):
    r = api.get("/api/address")
    assert r.status_code == 400
    assert r.json() == {"error": "검색어가 필요합니다"}


def test_address_proxies_result(api, upstream):
    payload = {"results": {"common": {"totalCount": "1"}, "juso": [{"roadAddr": "서울특별시 중구 세종대로 110"}]}}
    upstream.routes["addrLinkApi.do"] = payload
    r = api.get("/api/address", params={"keyword": "세종대로 110"})
    assert r.status_code == 200
    assert r.json() == payload

    sent = upstream.request_for("addrLinkApi.do")
    assert sent.url.params["keyword"] == "세종대로 110"
    assert sent.url.params["confmKey"] == "test-juso-key"
    assert sent.url.params["countPerPage"] == "5"


def test_address_failure_returns_empty_list(api, upstream):
    upstream.routes["addrLinkApi.do"] = httpx.Response(500)
    r = api.get("/api/address", params={"keyword": "세종대로"})
    assert r.status_code == 200
    assert r.json() == {"results": {"juso": []}}


# ── /api/payment-verify ──────────────────────────────────────────────────────
PAYMENT = {"paymentKey": "tgen_20240101", "orderId": "order-1", "amount": 29000}


def test_payment_missing_fields(api, upstream):
    r = api.post("/api/payment-verify", json={"paymentKey": "x"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "필수 파라미터 누락", "code": None}
    assert upstream.calls == []


def test_payment_without_secret_is_503(api, upstream):
    r = api.post("/api/payment-verify", json=PAYMENT)
    assert r.status_code == 503
    assert "error" in r.json()
    assert upstream.calls == []


def test_payment_confirmed(api, upstream, settings):
    settings.TOSS_SECRET_KEY = "test_sk_abc"
    upstream.routes["confirm"] = {
        "status": "DONE",
        "paymentKey": "tgen_20240101",
        "orderId": "order-1",
        "totalAmount": 29000,
        "method": "카드",
        "approvedAt": "2024-01-01T12:00:00+09:00",
    }
    r = api.post("/api/payment-verify", json=PAYMENT)
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "paymentKey": "tgen_20240101",
        "orderId": "order-1",
        "amount": 29000,
        "approvedAt": "2024-01-01T12:00:00+09:00",
        "method": "카드",
    }

    sent = upstream.request_for("confirm")
    assert sent.headers["authorization"] == "Basic " + base64.b64encode(b"test_sk_abc:").decode()
    assert json.loads(sent.content) == PAYMENT


def test_payment_rejected(api, upstream, settings):
    settings.TOSS_SECRET_KEY = "test_sk_abc"
    upstream.routes["confirm"] = httpx.Response(
        400, json={"code": "ALREADY_PROCESSED_PAYMENT", "message": "이미 처리된 결제 입니다."}
    )
    r = api.post("/api/payment-verify", json=PAYMENT)
    assert r.status_code == 400
    assert r.json() == {
        "success": False,
        "message": "이미 처리된 결제 입니다.",
        "code": "ALREADY_PROCESSED_PAYMENT",
    }


def test_payment_transport_error_is_500(api, upstream, settings):
    settings.TOSS_SECRET_KEY = "test_sk_abc"
    upstream.routes["confirm"] = httpx.ConnectError("down")
    r = api.post("/api/payment-verify", json=PAYMENT)
    assert r.status_code == 500
    assert r.json()["success"] is False


# ── /api/send-email ──────────────────────────────────────────────────────────
REPORT = {
    "to": "owner@example.com",
    "bizName": "카페",
    "areaName": "을지로",
    "score": 72,
    "grade": "안전",
    "risks": ["임대료 부담", "경쟁 포화"],
}


def test_email_invalid_address(api, upstream):
    r = api.post("/api/send-email", json=dict(REPORT, to="not-an-email"))
    assert r.status_code == 400
    assert r.json() == {"error": "유효한 이메일 주소가 필요합니다."}
    assert upstream.calls == []


def test_email_without_key_is_503(api, upstream):
    r = api.post("/api/send-email", json=REPORT)
    assert r.status_code == 503
    assert "RESEND_API_KEY" in r.json()["error"]
    assert upstream.calls == []


def test_email_sent(api, upstream, settings):
    settings.RESEND_API_KEY = "re_test"
    upstream.routes["emails"] = {"id": "email_123"}
    r = api.post("/api/send-email", json=dict(REPORT, bizName="<script>alert(1)</script>"))
    assert r.status_code == 200
    assert r.json() == {"success": True, "id": "email_123"}

    sent = upstream.request_for("emails")
    assert sent.headers["authorization"] == "Bearer re_test"
    body = json.loads(sent.content)
    assert body["to"] == ["owner@example.com"]
    assert "<script>" not in body["html"]
    assert "&lt;script&gt;" in body["html"]
    assert "임대료 부담" in body["html"]


def test_email_rejected_by_provider(api, upstream, settings):
    settings.RESEND_API_KEY = "re_test"
    upstream.routes["emails"] = httpx.Response(
        422, json={"name": "validation_error", "message": "Invalid `to` field."}
    )
    r = api.post("/api/send-email", json=REPORT)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid `to` field."}


# ── /api/ai-summary ──────────────────────────────────────────────────────────
def test_ai_summary_template_mode(api):
    r = api.post(
        "/api/ai-summary",
        json={"bizType": "카페", "areaName": "을지로", "riskScore": 75, "roi": 35.2, "bep": 18},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["isMock"] is True
    assert body["riskLevel"] == "높음"
    assert body["roiGrade"] == "우수"
    assert len(body["risks"]) == 3
    assert len(body["strategies"]) == 2
    assert body["summary"].startswith("을지로 카페 창업을 분석한 결과")


# ── /api/simulate/roi ────────────────────────────────────────────────────────
def test_simulate_roi(api):
    r = api.post(
        "/api/simulate/roi",
        json={
            "monthly_sales": 20_000_000,
            "rent": 2_000_000,
            "cogs_rate": 0.25,
            "capex": 30_000_000,
        },
    )
    assert r.status_code == 200
    assert r.json() == {
        "monthly_profit": 9_500_000,
        "payback_month": 3,
        "margin_rate": 0.475,
        "roi_percent": 380.0,
    }


def test_malformed_body_is_400(api):
    r = api.post(
        "/api/simulate/roi",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "잘못된 요청 형식입니다."}


def test_invalid_field_is_400(api):
    r = api.post("/api/simulate/roi", json={"monthly_sales": 1, "rent": 1, "capex": 0})
    assert r.status_code == 400


def test_malformed_payment_body_uses_payment_shape(api, upstream):
    r = api.post(
        "/api/payment-verify",
        content=b"{broken",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "잘못된 요청입니다."
    assert "error" not in body
    assert upstream.calls == []
