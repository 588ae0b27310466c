"""
Type definitions for the coaching engine.

Contains the dataclasses shared by assessment scoring, mood analytics,
intervention policy and message composition.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, Dict, Any

from moodcoach.utils import as_utc


TRAITS = ("extraversion", "agreeableness", "conscientiousness", "neuroticism", "openness")
ENERGY_LEVELS = ("low", "mid", "high")
MOOD_TRENDS = ("improving", "declining", "stable")
TEMPLATE_TYPES = ("compassion", "reflection", "action")

MOOD_SCORE_RANGE = (1, 5)
MAX_FREE_TEXT_LENGTH = 280


@dataclass(frozen=True)
class TipiResponse:
    """One answer to a TIPI question (1-7 Likert scale)."""
    question_id: int
    score: int


@dataclass(frozen=True)
class BigFiveScores:
    """Big Five trait scores on a single scale."""
    extraversion: float
    agreeableness: float
    conscientiousness: float
    neuroticism: float
    openness: float

    def get(self, trait: str) -> float:
        return getattr(self, trait)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BigFiveScores":
        return cls(**{trait: float(data[trait]) for trait in TRAITS})


@dataclass(frozen=True)
class TraitScores:
    """Raw, normalized (p01) and T-score representations of one response set."""
    raw: BigFiveScores
    p01: BigFiveScores
    t: BigFiveScores


@dataclass(frozen=True)
class CheckinRecord:
    """A stored daily check-in."""
    id: str
    user_id: str
    mood_score: int  # 1-5
    energy_level: str  # "low" | "mid" | "high"
    free_text: Optional[str]
    created_at: datetime

    @property
    def day(self):
        """Calendar date of the check-in in UTC."""
        return as_utc(self.created_at).date()

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "CheckinRecord":
        """Build a record from a MongoDB check-in document."""
        created_at = doc["createdAt"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        # Stored timestamps are UTC whether or not they carry an offset
        created_at = as_utc(created_at)

        return cls(
            id=str(doc["_id"]),
            user_id=str(doc["userId"]),
            mood_score=int(doc["moodScore"]),
            energy_level=doc["energyLevel"],
            free_text=doc.get("freeText"),
            created_at=created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "moodScore": self.mood_score,
            "energyLevel": self.energy_level,
            "freeText": self.free_text,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class MoodAnalytics:
    """Derived statistics over a check-in history."""
    average_mood: float
    mood_trend: str  # "improving" | "declining" | "stable"
    energy_distribution: Dict[str, int]
    total_checkins: int
    streak_days: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "averageMood": self.average_mood,
            "moodTrend": self.mood_trend,
            "energyDistribution": dict(self.energy_distribution),
            "totalCheckins": self.total_checkins,
            "streakDays": self.streak_days,
        }


@dataclass
class InterventionContext:
    """Everything template selection and message composition need."""
    mood_average: float
    mood_trend: str
    energy_level: str
    recent_checkins: int
    streak_days: int
    free_text: Optional[str] = None
    personality_traits: Optional[BigFiveScores] = None  # p01 scale


@dataclass(frozen=True)
class InterventionMessage:
    """Coaching message shown to the user."""
    title: str  # <= 100 chars
    body: str  # <= 500 chars
    cta_text: str  # <= 50 chars

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "body": self.body, "cta_text": self.cta_text}


@dataclass
class InterventionResult:
    """Composer output; `fallback` is True only for template-built messages."""
    template: str
    message: InterventionMessage
    fallback: bool
    source: str  # "orchestrator" | "ai" | "template"
    context: InterventionContext
    metadata: Dict[str, Any] = field(default_factory=dict)
