"""
Ten-Item Personality Inventory question catalog.

Gosling, S. D., Rentfrow, P. J., & Swann Jr, W. B. (2003). Each Big Five
trait is measured by exactly two items, one of them reverse-coded.
"""

from dataclasses import dataclass
from typing import Dict, List, Any

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class TipiQuestion:
    """One TIPI item with its localized prompt texts."""
    id: int
    trait: str
    reverse: bool
    text: Dict[str, str]

    def text_for(self, locale: str = DEFAULT_LOCALE) -> str:
        return self.text.get(locale) or self.text[DEFAULT_LOCALE]


TIPI_QUESTIONS: List[TipiQuestion] = [
    TipiQuestion(
        id=1, trait="extraversion", reverse=False,
        text={
            "en": "Extraverted, enthusiastic",
            "vi": "Hướng ngoại, nhiệt tình",
            "ja": "外向的で、熱狂的",
        },
    ),
    TipiQuestion(
        id=2, trait="agreeableness", reverse=True,
        text={
            "en": "Critical, quarrelsome",
            "vi": "Hay chỉ trích, thích tranh cãi",
            "ja": "批判的で、口論好き",
        },
    ),
    TipiQuestion(
        id=3, trait="conscientiousness", reverse=False,
        text={
            "en": "Dependable, self-disciplined",
            "vi": "Đáng tin cậy, có kỷ luật tự giác",
            "ja": "信頼でき、自制心がある",
        },
    ),
    TipiQuestion(
        id=4, trait="neuroticism", reverse=False,
        text={
            "en": "Anxious, easily upset",
            "vi": "Lo lắng, dễ bị kích động",
            "ja": "不安で、動揺しやすい",
        },
    ),
    TipiQuestion(
        id=5, trait="openness", reverse=False,
        text={
            "en": "Open to new experiences, complex",
            "vi": "Cởi mở với trải nghiệm mới, phức tạp",
            "ja": "新しい経験に開放的で、複雑",
        },
    ),
    TipiQuestion(
        id=6, trait="extraversion", reverse=True,
        text={
            "en": "Reserved, quiet",
            "vi": "Dè dặt, ít nói",
            "ja": "控えめで、静か",
        },
    ),
    TipiQuestion(
        id=7, trait="agreeableness", reverse=False,
        text={
            "en": "Sympathetic, warm",
            "vi": "Thông cảm, ấm áp",
            "ja": "同情的で、温かい",
        },
    ),
    TipiQuestion(
        id=8, trait="conscientiousness", reverse=True,
        text={
            "en": "Disorganized, careless",
            "vi": "Thiếu tổ chức, bất cẩn",
            "ja": "整理整頓ができず、不注意",
        },
    ),
    TipiQuestion(
        id=9, trait="neuroticism", reverse=True,
        text={
            "en": "Calm, emotionally stable",
            "vi": "Bình tĩnh, ổn định về mặt cảm xúc",
            "ja": "冷静で、感情的に安定している",
        },
    ),
    TipiQuestion(
        id=10, trait="openness", reverse=True,
        text={
            "en": "Conventional, uncreative",
            "vi": "Theo lối mòn, thiếu sáng tạo",
            "ja": "従来的で、創造性に欠ける",
        },
    ),
]

QUESTIONS_BY_ID: Dict[int, TipiQuestion] = {q.id: q for q in TIPI_QUESTIONS}


def get_questions_for_locale(locale: str = DEFAULT_LOCALE) -> List[Dict[str, Any]]:
    """
    Get the catalog with texts resolved for one locale.

    Unknown locales fall back to English.
    """
    return [
        {
            "id": q.id,
            "trait": q.trait,
            "reverse": q.reverse,
            "text": q.text_for(locale),
        }
        for q in TIPI_QUESTIONS
    ]


def get_question_text(question_id: int, locale: str = DEFAULT_LOCALE) -> str:
    """
    Get a single question's text.

    Raises:
        ValueError: If the question id is not in the catalog
    """
    question = QUESTIONS_BY_ID.get(question_id)
    if question is None:
        raise ValueError(f"Invalid question ID: {question_id}")
    return question.text_for(locale)
