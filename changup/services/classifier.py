# changup/services/classifier.py
# -----------------------------------------------------------------------------
# 업종명(자유 입력) → 소상공인 상권정보 대분류 코드
# - 부분 문자열 포함 여부로 매칭, 테이블 순서상 첫 일치 코드 반환
# -----------------------------------------------------------------------------
from typing import Optional

# 순서 유지 (dict 삽입 순서). 라틴 키는 소문자로 둔다.
BIZ_CATEGORY_CODES: dict[str, str] = {
    "카페": "Q12", "커피": "Q12", "음료": "Q12", "디저트": "Q12", "브런치": "Q12",
    "한식": "Q01", "식당": "Q01", "밥집": "Q01", "고깃집": "Q01", "삼겹살": "Q01", "갈비": "Q01",
    "치킨": "Q09", "닭": "Q09", "후라이드": "Q09",
    "중국": "Q03", "중식": "Q03", "짜장": "Q03", "짬뽕": "Q03", "탕수육": "Q03",
    "분식": "Q01", "김밥": "Q01", "떡볶이": "Q01", "라면": "Q01",
    "빵": "Q12", "베이커리": "Q12", "제과": "Q12", "케이크": "Q12",
    "술집": "Q07", "주점": "Q07", "호프": "Q07", "포차": "Q07", "이자카야": "Q07",
    "피자": "Q09", "햄버거": "Q09", "패스트푸드": "Q09",
    "편의점": "D20", "cvs": "D20",
    "마트": "D10", "슈퍼": "D10",
    "옷": "D30", "의류": "D30", "패션": "D30",
    "미용": "R04", "헤어": "R04", "뷰티": "R04", "미용실": "R04", "헤어샵": "R04",
    "네일": "R04", "네일샵": "R04", "손톱": "R04",
    "헬스": "R05", "피트니스": "R05", "헬스장": "R05", "체육": "R05", "운동": "R05",
    "노래방": "R06", "노래": "R06", "코인노래방": "R06",
    "pc방": "R06", "pc": "R06", "게임": "R06", "인터넷": "R06",
    "학원": "S01", "교육": "S01",
    "약국": "L01", "병원": "L02",
}


def classify(business_type: Optional[str]) -> Optional[str]:
    """업종 코드. 입력이 없거나 일치 키가 없으면 None."""
    if not business_type:
        return None
    lowered = business_type.lower()
    for key, code in BIZ_CATEGORY_CODES.items():
        if key in lowered:
            return code
    return None
