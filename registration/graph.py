import logging
from typing import Any, Literal, Optional

from langgraph.graph import StateGraph, START, END

from registration.actions import RegistrationBackend
from registration.state import (
    FormState,
    ModerationResolved,
    RegistrationInput,
    RegistrationResult,
    SubmitStatus,
)
from registration.validator import REQUIRED_MESSAGES, RegistrationValidator

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "An error occurred. Please try again."


class RegistrationGraphFactory:
    """
    Submit pipeline:

        validate -> missing -> gate -> register

    `missing` ends the run when any field is absent or invalid, `gate` ends it
    when the picture was judged inappropriate or never checked. Only a state
    that passed both reaches `register`, which calls the backend once.
    """

    def __init__(self, validator: RegistrationValidator, backend: RegistrationBackend):
        self.validator = validator
        self.backend = backend

    @staticmethod
    def gate_node(state: FormState) -> FormState:
        if state.image_rejected:
            logger.info("Submission blocked: profile picture is not work-appropriate")
            return state.model_copy(update={"submit_status": SubmitStatus.INAPPROPRIATE_IMAGE})

        if not isinstance(state.moderation, ModerationResolved):
            errors = dict(state.validation_errors)
            errors["profile_picture"] = REQUIRED_MESSAGES["profile_picture"]
            return state.model_copy(
                update={
                    "validation_errors": errors,
                    "missing_fields": ["profile_picture"],
                    "submit_status": SubmitStatus.MISSING_PICTURE,
                }
            )

        return state

    @staticmethod
    def should_register(state: FormState) -> Literal["end", "register"]:
        return "register" if state.submit_status == SubmitStatus.PENDING else "end"

    async def register_node(self, state: FormState) -> FormState:
        payload = RegistrationInput.model_validate(state.field_values())
        try:
            result = await self.backend.register(payload)
        except Exception:
            logger.exception("Registration backend failed")
            result = RegistrationResult(success=False, message=FAILURE_MESSAGE)

        status = SubmitStatus.REGISTERED if result.success else SubmitStatus.FAILED
        return state.model_copy(update={"registration_result": result, "submit_status": status})

    def build(self) -> StateGraph:
        g = StateGraph(FormState)

        g.add_node("validate", self.validator.validate_present_fields)
        g.add_node("missing", self.validator.compute_missing_fields)
        g.add_node("gate", self.gate_node)
        g.add_node("register", self.register_node)

        g.add_edge(START, "validate")
        g.add_edge("validate", "missing")

        g.add_conditional_edges(
            "missing",
            self.validator.should_gate,
            {"end": END, "gate": "gate"},
        )
        g.add_conditional_edges(
            "gate",
            self.should_register,
            {"end": END, "register": "register"},
        )
        g.add_edge("register", END)

        return g

    def compile(self, checkpointer: Optional[Any] = None):
        return self.build().compile(checkpointer=checkpointer)
