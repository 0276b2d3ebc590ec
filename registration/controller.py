import itertools
import logging
from typing import Any, Optional

from pydantic import ValidationError

from moderation.client import ModerationClient
from moderation.data_uri import read_as_data_uri
from registration.actions import RegistrationBackend
from registration.graph import FAILURE_MESSAGE, RegistrationGraphFactory
from registration.notifications import Notification, Notifier
from registration.state import (
    FORM_FIELDS,
    FormState,
    ModerationChecking,
    ModerationIdle,
    ModerationResolved,
    ProfilePicture,
    SubmitStatus,
)
from registration.strength import score_password
from registration.validator import INVALID_MESSAGES, RegistrationValidator

logger = logging.getLogger(__name__)


class FormController:
    """
    Owns the transient state of one registration form.

    Field edits are validated as they happen. Picking a picture runs the
    moderation check in the background of the event loop; each pick gets a
    new sequence number and a result that comes back for an older pick is
    dropped. Submitting runs the submit graph and resets the form on success.
    """

    def __init__(
        self,
        moderation_client: ModerationClient,
        backend: RegistrationBackend,
        notifier: Notifier,
        validator: Optional[RegistrationValidator] = None,
    ):
        self.moderation_client = moderation_client
        self.notifier = notifier
        self.validator = validator or RegistrationValidator()
        self.graph = RegistrationGraphFactory(self.validator, backend).compile()

        self.state = FormState()
        self.submitting = False
        self._sequence = itertools.count(1)
        self._latest_sequence = 0

    @property
    def can_submit(self) -> bool:
        return not (self.state.is_checking or self.submitting)

    def reset(self) -> None:
        # selections still in flight belong to the discarded form
        self._latest_sequence = next(self._sequence)
        self.state = FormState()

    def set_field(self, name: str, value: Any) -> FormState:
        if name not in FORM_FIELDS:
            raise KeyError(f"Unknown form field: {name}")
        if name == "profile_picture":
            raise ValueError("Use select_picture() to change the profile picture")

        state = self.state.model_copy()
        try:
            setattr(state, name, value)
        except ValidationError:
            logger.debug("Rejected value of wrong type for %s", name)
            errors = dict(self.state.validation_errors)
            errors[name] = INVALID_MESSAGES[name]
            self.state = self.state.model_copy(update={"validation_errors": errors})
            return self.state
        if name == "password":
            state.password_strength = score_password(value or "")

        validated = self.validator.validate_present_fields(state)

        # required-field errors from the last submit stay until the field is filled
        errors = dict(validated.validation_errors)
        for field in state.missing_fields:
            if getattr(validated, field) is None and field in state.validation_errors:
                errors.setdefault(field, state.validation_errors[field])

        self.state = validated.model_copy(update={"validation_errors": errors})
        return self.state

    async def select_picture(self, picture: ProfilePicture) -> FormState:
        sequence = next(self._sequence)
        self._latest_sequence = sequence

        errors = dict(self.state.validation_errors)
        errors.pop("profile_picture", None)
        self.state = self.state.model_copy(
            update={
                "profile_picture": picture,
                "validation_errors": errors,
                "moderation": ModerationIdle(),
                "preview_data_uri": None,
            }
        )

        picture_error = self.validator.check({"profile_picture": picture}).get("profile_picture")
        if picture_error:
            logger.info("Rejected %s before moderation: %s", picture.filename or "picture", picture_error)
            errors["profile_picture"] = picture_error
            self.state = self.state.model_copy(update={"validation_errors": errors})
            return self.state

        self.state = self.state.model_copy(update={"moderation": ModerationChecking(sequence=sequence)})

        data_uri = await read_as_data_uri(picture.content_type, picture.data)
        if sequence == self._latest_sequence:
            self.state = self.state.model_copy(update={"preview_data_uri": data_uri})

        result = await self.moderation_client.check_image(data_uri)

        if sequence != self._latest_sequence:
            logger.debug("Dropping moderation result for superseded selection %d", sequence)
            return self.state

        self.state = self.state.model_copy(
            update={"moderation": ModerationResolved(sequence=sequence, result=result)}
        )
        if not result.is_work_appropriate:
            self.notifier.notify(
                Notification(title="Inappropriate Image", description=result.reason, variant="destructive")
            )
        return self.state

    async def submit(self) -> SubmitStatus:
        if not self.can_submit:
            return SubmitStatus.BUSY

        self.submitting = True
        try:
            pending = self.state.model_copy(
                update={"submit_status": SubmitStatus.PENDING, "registration_result": None}
            )
            outcome = FormState.model_validate(await self.graph.ainvoke(pending))
        finally:
            self.submitting = False

        status = outcome.submit_status
        if status == SubmitStatus.INAPPROPRIATE_IMAGE:
            self.notifier.notify(
                Notification(
                    title="Cannot Submit",
                    description="Please upload a work-appropriate profile picture.",
                    variant="destructive",
                )
            )
            return status

        # edits made while the backend was busy are kept; only the verdict is taken over
        self.state = self.state.model_copy(
            update={
                "submit_status": status,
                "registration_result": outcome.registration_result,
                "validation_errors": outcome.validation_errors,
                "missing_fields": outcome.missing_fields,
            }
        )

        if status == SubmitStatus.REGISTERED:
            self.reset()
            self.notifier.notify(Notification(title="Registration successful!", description="Welcome to FormFlow."))
        elif status == SubmitStatus.FAILED:
            self.notifier.notify(
                Notification(title="Registration failed", description=FAILURE_MESSAGE, variant="destructive")
            )
        return status
