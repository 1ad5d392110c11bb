# tests/test_classifier.py
import pytest

from changup.services.classifier import BIZ_CATEGORY_CODES, classify


@pytest.mark.parametrize(
    "biz_type, code",
    [
        ("카페", "Q12"),
        ("커피", "Q12"),
        ("치킨집", "Q09"),
        ("중식", "Q03"),
        ("짬뽕", "Q03"),
        ("편의점", "D20"),
        ("CVS", "D20"),
        ("PC방", "R06"),
        ("미용실", "R04"),
        ("헬스장", "R05"),
        ("학원", "S01"),
        ("약국", "L01"),
    ],
)
def test_known_business_types(biz_type, code):
    assert classify(biz_type) == code


def test_substring_match_uses_containing_key():
    """키를 포함하는 자유 입력도 같은 코드로 분류된다."""
    assert classify("강남 카페거리") == classify("커피") == "Q12"
    assert classify("동네 베이커리") == "Q12"


def test_first_match_in_table_order_wins():
    # '갈비'(Q01)가 '닭'(Q09)보다 테이블 앞에 있음
    assert classify("닭갈비") == "Q01"


@pytest.mark.parametrize("biz_type", [None, "", "우주여행사", "xyz"])
def test_unknown_or_missing_is_none(biz_type):
    assert classify(biz_type) is None


def test_every_table_key_is_classified():
    """모든 키 입력은 None이 아닌 코드로 분류된다."""
    for key in BIZ_CATEGORY_CODES:
        assert classify(key) is not None
