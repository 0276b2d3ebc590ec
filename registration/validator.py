import logging
from typing import Dict, List, Literal, Mapping, Optional, Set

from pydantic import ValidationError

from registration.state import (
    CUSTOM_ERROR_TYPES,
    FORM_FIELDS,
    FormState,
    RegistrationInput,
    SubmitStatus,
)

logger = logging.getLogger(__name__)

REQUIRED_MESSAGES: Dict[str, str] = {
    "full_name": "Full name must be at least 2 characters.",
    "email": "Please enter a valid email address.",
    "password": "Password must be at least 8 characters.",
    "confirm_password": "Passwords do not match.",
    "dob": "A date of birth is required.",
    "gender": "You need to select a gender.",
    "profile_picture": "Profile picture is required.",
    "terms": "You must accept the terms and conditions.",
}

# used when pydantic rejects a value before our own checks run
INVALID_MESSAGES: Dict[str, str] = {
    "full_name": "Full name must be at least 2 characters.",
    "email": "Please enter a valid email address.",
    "password": "Password must be at least 8 characters.",
    "confirm_password": "Passwords do not match.",
    "dob": "A date of birth is required.",
    "gender": "You need to select a gender.",
    "profile_picture": "Profile picture is required.",
    "terms": "You must accept the terms and conditions.",
}


def errors_by_field(exc: ValidationError) -> Dict[str, str]:
    """First error message for each field of a RegistrationInput ValidationError."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__root__"
        if field in errors:
            continue
        if err["type"] == "missing":
            errors[field] = REQUIRED_MESSAGES.get(field, "This field is required.")
        elif field in INVALID_MESSAGES and err["type"] not in CUSTOM_ERROR_TYPES:
            errors[field] = INVALID_MESSAGES[field]
        else:
            errors[field] = err["msg"]
    return errors


class RegistrationValidator:
    def __init__(self, required_fields: Optional[Set[str]] = None):
        self.required_fields = required_fields or set(FORM_FIELDS)

    def check(self, values: Mapping[str, object]) -> Dict[str, str]:
        """Errors for the given field values only; absent fields are not reported."""
        try:
            RegistrationInput.model_validate(dict(values))
        except ValidationError as exc:
            return {k: v for k, v in errors_by_field(exc).items() if k in values}
        return {}

    def validate_present_fields(self, state: FormState) -> FormState:
        errors = self.check(state.field_values())
        return state.model_copy(update={"validation_errors": errors})

    def compute_missing_fields(self, state: FormState) -> FormState:
        missing: List[str] = []
        errors = dict(state.validation_errors)

        for field in sorted(self.required_fields):
            val = getattr(state, field, None)
            if val is None or val == "":
                missing.append(field)
                errors.setdefault(field, REQUIRED_MESSAGES[field])

        for field in errors.keys():
            if field not in missing:
                missing.append(field)

        update = {"missing_fields": sorted(missing), "validation_errors": errors}
        if missing:
            logger.info("Submission rejected, fields needing attention: %s", sorted(missing))
            update["submit_status"] = SubmitStatus.INVALID
        return state.model_copy(update=update)

    @staticmethod
    def should_gate(state: FormState) -> Literal["end", "gate"]:
        return "gate" if len(state.missing_fields) == 0 else "end"
