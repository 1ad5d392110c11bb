# changup/services/scoring.py

import math
from collections import Counter
from typing import Iterable, Optional


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# (상한 미만, 레벨, 점수). 0건은 별도 처리.
COMPETITION_BREAKPOINTS = [
    (20, "낮음", 80),
    (50, "보통", 60),
    (100, "높음", 35),
]


def competition_level(total_count: int) -> tuple[str, int]:
    """
    반경 내 전체 상가 수 → (경쟁 강도, 경쟁 점수 0~100).
    점수는 높을수록 경쟁이 낮음.
    """
    if total_count <= 0:
        return "데이터없음", 50
    for upper, level, score in COMPETITION_BREAKPOINTS:
        if total_count < upper:
            return level, score
    return "매우높음", 15


def close_risk_bonus(close_rate: Optional[float]) -> int:
    """동종 업종 폐업률(%) → 위험도 가산점."""
    if not close_rate:
        return 0
    if close_rate > 20:
        return 20
    if close_rate > 10:
        return 10
    return 0


def survival_rate(open_count: int, close_count: int) -> Optional[int]:
    total = open_count + close_count
    if total <= 0:
        return None
    return round_half_up(open_count / total * 100)


def top_categories(labels: Iterable[str], k: int = 5) -> list[tuple[str, int]]:
    """빈도 내림차순 상위 k개. 동률은 먼저 등장한 순서."""
    counts = Counter(labels)
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:k]
