"""
Prompt construction for AI-generated interventions.
"""

from moodcoach.types import InterventionContext

SYSTEM_PROMPT = """You are a compassionate mental health coach. Generate supportive, actionable advice based on user's mood data.

Guidelines:
- Be empathetic and understanding
- Provide specific, actionable suggestions
- Keep messages concise but meaningful
- Use encouraging, non-judgmental tone
- Focus on practical steps the user can take

Response format must be valid JSON:
{
  "title": "Brief, encouraging title (max 50 chars)",
  "body": "Main message with specific advice (max 200 chars)",
  "cta_text": "Action button text (max 25 chars)"
}"""

JSON_FORMAT = 'Format as JSON: {"title": "...", "body": "...", "cta_text": "..."}'

TEMPLATE_INSTRUCTIONS = {
    "compassion": """Create a compassionate, supportive message that:
- Validates their current emotional state
- Offers gentle encouragement without toxic positivity
- Suggests small, manageable self-care actions
- Reminds them that difficult feelings are temporary
- Uses warm, empathetic language
- Keeps the tone soft and understanding""",
    "reflection": """Create a thoughtful, reflective message that:
- Encourages self-awareness and introspection
- Asks gentle questions to promote insight
- Suggests journaling or mindfulness practices
- Helps them identify patterns or triggers
- Uses curious, non-judgmental language
- Promotes growth through understanding""",
    "action": """Create an energizing, action-oriented message that:
- Celebrates their positive mood state
- Suggests concrete, achievable actions
- Encourages goal-setting or skill-building
- Motivates them to build on their momentum
- Uses upbeat, encouraging language
- Focuses on growth and forward movement""",
}

DEFAULT_INSTRUCTIONS = (
    "Create a balanced, supportive message that encourages continued "
    "self-reflection and growth."
)


def _mood_label(mood_average: float) -> str:
    if mood_average <= 2:
        return "low"
    if mood_average <= 3.5:
        return "neutral"
    return "good"


def build_intervention_prompt(template: str, context: InterventionContext) -> str:
    """
    Build the user prompt for one intervention.

    Includes mood, trend, energy, check-in count and streak, plus the
    optional note and p01 personality traits, followed by template-specific
    instructions and the expected JSON shape.
    """
    lines = [
        "Generate a personalized coaching message for someone with the following context:",
        "",
        "Mood Information:",
        f"- Average mood: {context.mood_average}/5 ({_mood_label(context.mood_average)})",
        f"- Mood trend: {context.mood_trend}",
        f"- Energy level: {context.energy_level}",
        f"- Recent check-ins: {context.recent_checkins}",
        f"- Check-in streak: {context.streak_days} days",
    ]

    if context.free_text:
        lines += ["", f'Recent thoughts: "{context.free_text}"']

    traits = context.personality_traits
    if traits:
        lines += [
            "",
            "Personality traits (0-1 scale):",
            f"- Extraversion: {traits.extraversion:.2f}",
            f"- Agreeableness: {traits.agreeableness:.2f}",
            f"- Conscientiousness: {traits.conscientiousness:.2f}",
            f"- Neuroticism: {traits.neuroticism:.2f}",
            f"- Openness: {traits.openness:.2f}",
        ]

    lines += [
        "",
        f"Template: {template.upper()}",
        "",
        "Instructions:",
        TEMPLATE_INSTRUCTIONS.get(template, DEFAULT_INSTRUCTIONS),
        "",
        JSON_FORMAT,
    ]

    return "\n".join(lines)
