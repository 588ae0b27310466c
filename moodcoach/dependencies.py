"""
FastAPI dependencies for the MoodCoach application.

Provides dependency injection for all services.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.ai import get_ai_provider
from common.auth import AuthProvider, JWTAuth, create_auth_dependency

from moodcoach.config import Settings
from moodcoach.services.assessment.trait_service import TraitService
from moodcoach.services.checkin.checkin_service import CheckInService
from moodcoach.services.intervention.ai_generator import AIInterventionGenerator
from moodcoach.services.intervention.intervention_service import InterventionService
from moodcoach.services.intervention.message_composer import MessageComposer
from moodcoach.services.intervention.orchestrator_client import OrchestratorClient

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

_auth: Optional[AuthProvider] = None

_checkin_service: Optional[CheckInService] = None
_trait_service: Optional[TraitService] = None
_intervention_service: Optional[InterventionService] = None
_message_composer: Optional[MessageComposer] = None


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_auth_services(settings: Settings) -> None:
    """Initialize token verification."""
    global _auth

    if not settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set; authenticated endpoints will reject all requests")

    _auth = JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def init_data_services(db: AsyncIOMotorDatabase) -> None:
    """Initialize persistence services."""
    global _checkin_service, _trait_service, _intervention_service

    _checkin_service = CheckInService(db=db)
    _trait_service = TraitService(db=db)
    _intervention_service = InterventionService(db=db)


def init_intervention_services(settings: Settings) -> None:
    """Initialize the message composer and its optional external stages."""
    global _message_composer

    provider = get_ai_provider(settings)
    ai_generator = AIInterventionGenerator(provider=provider) if provider else None

    orchestrator = None
    if settings.orchestrator_enabled():
        orchestrator = OrchestratorClient(
            base_url=settings.ORCHESTRATOR_URL,
            api_key=settings.ORCHESTRATOR_API_KEY,
            timeout_ms=settings.ORCHESTRATOR_TIMEOUT_MS,
        )

    _message_composer = MessageComposer(
        ai_generator=ai_generator,
        orchestrator=orchestrator,
        ai_timeout=settings.AI_TIMEOUT_SECONDS,
    )

    logger.info(
        f"Message composer ready (orchestrator={'on' if orchestrator else 'off'}, "
        f"ai={provider.name if provider else 'off'})"
    )


def init_all_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """Initialize every service. Called once from the app lifespan."""
    init_auth_services(settings)
    init_data_services(db)
    init_intervention_services(settings)


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_auth_provider() -> AuthProvider:
    """Get token verification provider."""
    if _auth is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth


def get_checkin_service() -> CheckInService:
    """Get check-in service instance."""
    if _checkin_service is None:
        raise RuntimeError("Data services not initialized.")
    return _checkin_service


def get_trait_service() -> TraitService:
    """Get trait service instance."""
    if _trait_service is None:
        raise RuntimeError("Data services not initialized.")
    return _trait_service


def get_intervention_service() -> InterventionService:
    """Get intervention service instance."""
    if _intervention_service is None:
        raise RuntimeError("Data services not initialized.")
    return _intervention_service


def get_message_composer() -> MessageComposer:
    """Get message composer instance."""
    if _message_composer is None:
        raise RuntimeError("Intervention services not initialized.")
    return _message_composer


# ─────────────────────────────────────────────────────────────────
# Request dependencies
# ─────────────────────────────────────────────────────────────────

get_current_user_id = create_auth_dependency(get_auth_provider)

CurrentUserId = Annotated[str, Depends(get_current_user_id)]
CheckInServiceDep = Annotated[CheckInService, Depends(get_checkin_service)]
TraitServiceDep = Annotated[TraitService, Depends(get_trait_service)]
InterventionServiceDep = Annotated[InterventionService, Depends(get_intervention_service)]
MessageComposerDep = Annotated[MessageComposer, Depends(get_message_composer)]
