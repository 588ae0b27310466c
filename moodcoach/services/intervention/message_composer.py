"""
Intervention message composition.

Builds the coaching message for a check-in. Sources are tried in order:
the external orchestrator, the AI generator, then deterministic templates
enhanced with personality insights. The template stage never fails, so
compose() always returns a valid message.
"""

import asyncio
import json
import logging
import re
from typing import Any, Dict, Optional, TYPE_CHECKING

from moodcoach.services.intervention.orchestrator_client import (
    OrchestratorClient,
    OrchestratorError,
    map_tone_to_template,
)
from moodcoach.types import BigFiveScores, InterventionContext, InterventionMessage, InterventionResult
from moodcoach.utils import round_half_up

if TYPE_CHECKING:
    from moodcoach.services.intervention.ai_generator import AIInterventionGenerator

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
MAX_BODY_LENGTH = 500
MAX_CTA_LENGTH = 50

FALLBACK_CTA = {
    "compassion": "Take a Deep Breath",
    "reflection": "Reflect & Plan",
    "action": "Take Action",
}

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class MessageValidationError(ValueError):
    """A generated message is missing fields or exceeds length limits."""


# =============================================================================
# Deterministic templates
# =============================================================================

def generate_fallback_message(template: str, context: InterventionContext) -> InterventionMessage:
    """
    Build the template message for a context. Deterministic; never fails.

    Args:
        template: compassion, reflection or action
        context: Intervention context

    Returns:
        InterventionMessage
    """
    trend = context.mood_trend
    streak = context.streak_days

    if template == "compassion":
        if streak > 0:
            streak_line = f"Your {streak}-day check-in streak shows your commitment to self-care."
        else:
            streak_line = "Taking time to check in with yourself is already a positive step."

        return InterventionMessage(
            title="You're Not Alone 💙",
            body=" ".join([
                "I notice you've been having a tough time lately. Remember that difficult "
                "feelings are temporary, and it's okay to not be okay sometimes.",
                streak_line,
                "Consider reaching out to someone you trust or doing something small that "
                "brings you comfort.",
            ]),
            cta_text=FALLBACK_CTA["compassion"],
        )

    if template == "reflection":
        improving = trend == "improving"
        if improving:
            trend_line = "That's wonderful progress! What's been working well for you?"
        else:
            trend_line = "This is a good time to pause and reflect on what might help you feel more balanced."

        if context.energy_level == "low":
            energy_line = "Your energy seems low - consider what activities or practices might help restore it."
        else:
            energy_line = "Use this energy to explore what's most important to you right now."

        return InterventionMessage(
            title="Building Momentum 🌱" if improving else "Time to Reflect 🤔",
            body=" ".join([
                f"Your mood has been {'steady' if trend == 'stable' else trend} recently.",
                trend_line,
                energy_line,
            ]),
            cta_text=FALLBACK_CTA["reflection"],
        )

    if template == "action":
        parts = [f"You're feeling good with a mood average of {context.mood_average:.1f}!"]
        if trend == "improving":
            parts.append("And things are looking up - great momentum!")

        if context.energy_level == "high":
            parts.append("This is an excellent time to channel that high energy into something meaningful.")
        else:
            parts.append("This is an excellent time to take purposeful action toward your goals.")

        if streak >= 7:
            parts.append(f"Your {streak}-day streak shows real dedication!")
        else:
            parts.append("Keep building on this positive foundation.")

        return InterventionMessage(
            title="Riding the Wave 🌊",
            body=" ".join(parts),
            cta_text=FALLBACK_CTA["action"],
        )

    logger.warning(f"Unknown intervention template '{template}', using generic message")
    return InterventionMessage(
        title="Keep Going 🌟",
        body="Thank you for checking in with yourself today. Self-awareness is the first step toward positive change.",
        cta_text="Continue Journey",
    )


# Checked in order; the first match is appended.
PERSONALITY_INSIGHTS = {
    "compassion": [
        ("neuroticism", ">", " As someone who feels emotions deeply, remember that your sensitivity is also a strength."),
        ("agreeableness", ">", " Your caring nature means you might put others first - don't forget to be kind to yourself too."),
        ("conscientiousness", ">", " I know you hold yourself to high standards. Sometimes it's okay to ease up on yourself."),
    ],
    "reflection": [
        ("openness", ">", " Your openness to new experiences could help you discover fresh perspectives on your current situation."),
        ("conscientiousness", ">", " Your organized nature is an asset - consider creating a structured plan for moving forward."),
        ("extraversion", "<", " Taking quiet time for introspection aligns well with your reflective nature."),
    ],
    "action": [
        ("extraversion", ">", " Your outgoing energy is perfect for connecting with others or trying new social activities."),
        ("conscientiousness", ">", " Your disciplined approach means you're likely to follow through on whatever you decide to pursue."),
        ("openness", ">", " This might be a great time to explore that creative project or new interest you've been considering."),
    ],
}

HIGH_PERCENTILE = 70
LOW_PERCENTILE = 30


def enhance_message_with_personality(
    message: InterventionMessage,
    traits: Optional[BigFiveScores],
    template: str
) -> InterventionMessage:
    """
    Append at most one personality sentence to the message body.

    Trait p01 scores are converted to percentiles (p01 * 100, rounded);
    "high" means above 70 and "low" below 30.
    """
    if not traits:
        return message

    for trait, direction, sentence in PERSONALITY_INSIGHTS.get(template, []):
        percentile = round_half_up(traits.get(trait) * 100)
        if direction == ">" and percentile > HIGH_PERCENTILE or \
                direction == "<" and percentile < LOW_PERCENTILE:
            return InterventionMessage(
                title=message.title,
                body=message.body + sentence,
                cta_text=message.cta_text,
            )

    return message


# =============================================================================
# Validation and parsing
# =============================================================================

def validate_intervention_message(data: Any) -> bool:
    """True when data has non-empty title/body/cta_text strings within limits."""
    if not isinstance(data, dict):
        return False

    limits = (
        ("title", MAX_TITLE_LENGTH),
        ("body", MAX_BODY_LENGTH),
        ("cta_text", MAX_CTA_LENGTH),
    )
    for key, max_length in limits:
        value = data.get(key)
        if not isinstance(value, str) or not 0 < len(value) <= max_length:
            return False
    return True


def parse_ai_response(text: Optional[str]) -> Optional[InterventionMessage]:
    """
    Parse a model reply into a message.

    Accepts a bare JSON object or one wrapped in a ```json code fence.
    Returns None when the text is not valid JSON or fails validation.
    """
    if not text:
        return None

    cleaned = text.strip()
    fence = _CODE_FENCE.match(cleaned)
    if fence:
        cleaned = fence.group(1)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("Failed to parse AI response as JSON")
        return None

    if not validate_intervention_message(data):
        logger.warning("AI response failed message validation")
        return None

    return InterventionMessage(title=data["title"], body=data["body"], cta_text=data["cta_text"])


# =============================================================================
# Composer
# =============================================================================

class MessageComposer:
    """
    Produces an intervention message with a guaranteed result.

    Orchestrator and AI stages are optional; each is bounded by its own
    timeout and any failure moves on to the next stage.
    """

    def __init__(
        self,
        ai_generator: Optional["AIInterventionGenerator"] = None,
        orchestrator: Optional[OrchestratorClient] = None,
        ai_timeout: float = 15.0
    ):
        """
        Initialize MessageComposer.

        Args:
            ai_generator: AI message generator (None disables the AI stage)
            orchestrator: Orchestrator client (None disables that stage)
            ai_timeout: Seconds to wait for the AI stage
        """
        self._ai_generator = ai_generator
        self._orchestrator = orchestrator
        self._ai_timeout = ai_timeout

    async def compose(
        self,
        template: str,
        context: InterventionContext,
        orchestrator_payload: Optional[Dict[str, Any]] = None
    ) -> InterventionResult:
        """
        Compose an intervention message.

        Args:
            template: Mood-selected template
            context: Intervention context
            orchestrator_payload: Request body for the orchestrator; the
                orchestrator stage is skipped without it

        Returns:
            InterventionResult from the first stage that succeeds
        """
        if self._orchestrator and orchestrator_payload is not None:
            try:
                return await self._from_orchestrator(template, context, orchestrator_payload)
            except (OrchestratorError, MessageValidationError) as e:
                logger.warning(f"Orchestrator generation failed, falling back to AI: {e}")
            except Exception as e:
                logger.warning(f"Unexpected orchestrator failure, falling back to AI: {e}")

        if self._ai_generator:
            try:
                return await self._from_ai(template, context)
            except asyncio.TimeoutError:
                logger.warning(f"AI generation timed out after {self._ai_timeout}s, using template")
            except Exception as e:
                logger.warning(f"AI generation failed, using template: {e}")

        return self.compose_from_template(template, context)

    async def _from_orchestrator(
        self,
        template: str,
        context: InterventionContext,
        payload: Dict[str, Any]
    ) -> InterventionResult:
        response = await self._orchestrator.request_coaching_message(payload)

        resolved = map_tone_to_template(response.get("tone_used")) or template
        data = {
            "title": response.get("title"),
            "body": response.get("body"),
            "cta_text": response.get("suggested_action") or FALLBACK_CTA.get(resolved, "Continue Journey"),
        }
        if not validate_intervention_message(data):
            raise MessageValidationError("Orchestrator message failed validation")

        return InterventionResult(
            template=resolved,
            message=InterventionMessage(**data),
            fallback=False,
            source="orchestrator",
            context=context,
            metadata=response.get("metadata") or {},
        )

    async def _from_ai(self, template: str, context: InterventionContext) -> InterventionResult:
        generated = await asyncio.wait_for(
            self._ai_generator.generate(template, context),
            timeout=self._ai_timeout,
        )

        return InterventionResult(
            template=generated.template_type,
            message=generated.message,
            fallback=False,
            source="ai",
            context=context,
        )

    @staticmethod
    def compose_from_template(template: str, context: InterventionContext) -> InterventionResult:
        """Deterministic template message with personality enhancement."""
        message = generate_fallback_message(template, context)
        message = enhance_message_with_personality(message, context.personality_traits, template)

        return InterventionResult(
            template=template,
            message=message,
            fallback=True,
            source="template",
            context=context,
        )
