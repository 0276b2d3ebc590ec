from abc import ABC, abstractmethod
import asyncio
import logging

from registration.state import RegistrationInput, RegistrationResult

logger = logging.getLogger(__name__)


class RegistrationBackend(ABC):
    """Receives a fully validated registration. Storage and auth live behind this."""

    @abstractmethod
    async def register(self, payload: RegistrationInput) -> RegistrationResult: ...


class StubRegistrationBackend(RegistrationBackend):
    """
    Placeholder: nothing is saved, no duplicate-email check, no hashing.
    Waits `delay` seconds to simulate latency and always succeeds.
    """

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    async def register(self, payload: RegistrationInput) -> RegistrationResult:
        logger.info(
            "Registering user with data: %s",
            payload.model_dump(exclude={"password", "confirm_password", "profile_picture"}, mode="json"),
        )
        await asyncio.sleep(self.delay)
        return RegistrationResult(success=True, message="Registration successful!")
