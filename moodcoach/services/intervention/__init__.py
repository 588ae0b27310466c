"""Intervention services: policy, composition, generation and storage."""

from moodcoach.services.intervention.intervention_policy import (
    should_generate_intervention,
    select_intervention_template,
    calculate_intervention_priority,
    rank_interventions,
    build_intervention_context,
)
from moodcoach.services.intervention.message_composer import (
    MessageComposer,
    MessageValidationError,
    generate_fallback_message,
    enhance_message_with_personality,
    validate_intervention_message,
    parse_ai_response,
)
from moodcoach.services.intervention.prompt_builder import build_intervention_prompt
from moodcoach.services.intervention.ai_generator import (
    AIInterventionGenerator,
    AIGenerationError,
    GeneratedIntervention,
)
from moodcoach.services.intervention.orchestrator_client import (
    OrchestratorClient,
    OrchestratorError,
    build_orchestrator_payload,
    map_tone_to_template,
)
from moodcoach.services.intervention.intervention_service import InterventionService

__all__ = [
    "should_generate_intervention",
    "select_intervention_template",
    "calculate_intervention_priority",
    "rank_interventions",
    "build_intervention_context",
    "MessageComposer",
    "MessageValidationError",
    "generate_fallback_message",
    "enhance_message_with_personality",
    "validate_intervention_message",
    "parse_ai_response",
    "build_intervention_prompt",
    "AIInterventionGenerator",
    "AIGenerationError",
    "GeneratedIntervention",
    "OrchestratorClient",
    "OrchestratorError",
    "build_orchestrator_payload",
    "map_tone_to_template",
    "InterventionService",
]
