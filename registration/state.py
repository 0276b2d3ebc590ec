from datetime import date
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from moderation.schemas import ImageCheckResult
from registration.strength import StrengthResult

MAX_PICTURE_BYTES = 2 * 1024 * 1024
ALLOWED_PICTURE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
EARLIEST_DOB = date(1900, 1, 1)

CUSTOM_ERROR_TYPES = frozenset(
    {
        "full_name_too_short",
        "password_too_short",
        "password_mismatch",
        "dob_out_of_range",
        "picture_too_large",
        "picture_bad_type",
        "terms_not_accepted",
    }
)

FORM_FIELDS = (
    "full_name",
    "email",
    "password",
    "confirm_password",
    "dob",
    "gender",
    "profile_picture",
    "terms",
)


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ProfilePicture(BaseModel):
    filename: str = Field(default="", description="Original file name")
    content_type: str = Field(description="MIME type reported for the upload")
    data: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


class RegistrationInput(BaseModel):
    """The registration schema. Valid only when every field constraint holds."""

    full_name: str
    email: EmailStr
    password: str
    confirm_password: str
    dob: date
    gender: Gender
    profile_picture: ProfilePicture
    terms: bool

    @field_validator("full_name")
    @classmethod
    def _full_name_length(cls, v: str) -> str:
        if len(v) < 2:
            raise PydanticCustomError("full_name_too_short", "Full name must be at least 2 characters.")
        return v

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: str) -> str:
        if len(v) < 8:
            raise PydanticCustomError("password_too_short", "Password must be at least 8 characters.")
        return v

    @field_validator("confirm_password")
    @classmethod
    def _passwords_match(cls, v: str, info: ValidationInfo) -> str:
        # password is absent from info.data when it failed its own checks
        password = info.data.get("password")
        if password is not None and v != password:
            raise PydanticCustomError("password_mismatch", "Passwords do not match.")
        return v

    @field_validator("dob")
    @classmethod
    def _dob_range(cls, v: date) -> date:
        if v < EARLIEST_DOB or v > date.today():
            raise PydanticCustomError(
                "dob_out_of_range", "Date of birth must be between 1900-01-01 and today."
            )
        return v

    @field_validator("profile_picture")
    @classmethod
    def _picture_constraints(cls, v: ProfilePicture) -> ProfilePicture:
        if v.size > MAX_PICTURE_BYTES:
            raise PydanticCustomError("picture_too_large", "File size must be less than 2MB.")
        if v.content_type not in ALLOWED_PICTURE_TYPES:
            raise PydanticCustomError(
                "picture_bad_type", "Only JPG, PNG, and WEBP formats are allowed."
            )
        return v

    @field_validator("terms")
    @classmethod
    def _terms_accepted(cls, v: bool) -> bool:
        if v is not True:
            raise PydanticCustomError("terms_not_accepted", "You must accept the terms and conditions.")
        return v


class ModerationIdle(BaseModel):
    kind: Literal["idle"] = "idle"


class ModerationChecking(BaseModel):
    kind: Literal["checking"] = "checking"
    sequence: int


class ModerationResolved(BaseModel):
    kind: Literal["resolved"] = "resolved"
    sequence: int
    result: ImageCheckResult

    @property
    def appropriate(self) -> bool:
        return self.result.is_work_appropriate


ModerationStatus = Annotated[
    Union[ModerationIdle, ModerationChecking, ModerationResolved],
    Field(discriminator="kind"),
]


class SubmitStatus(str, Enum):
    PENDING = "pending"
    BUSY = "busy"
    INVALID = "invalid"
    INAPPROPRIATE_IMAGE = "inappropriate_image"
    MISSING_PICTURE = "missing_picture"
    REGISTERED = "registered"
    FAILED = "failed"


class RegistrationResult(BaseModel):
    success: bool
    message: str


class FormState(BaseModel):
    """Transient state of one form-filling session."""

    model_config = ConfigDict(validate_assignment=True)

    full_name: Optional[str] = Field(default=None, description="User's full name")
    email: Optional[str] = Field(default=None, description="User email")
    password: Optional[str] = Field(default=None, repr=False)
    confirm_password: Optional[str] = Field(default=None, repr=False)
    dob: Optional[Union[date, str]] = Field(default=None, description="YYYY-MM-DD")
    gender: Optional[str] = Field(default=None, description="male, female or other")
    profile_picture: Optional[ProfilePicture] = None
    terms: Optional[bool] = None

    validation_errors: Dict[str, str] = Field(default_factory=dict)
    missing_fields: List[str] = Field(default_factory=list)
    password_strength: StrengthResult = Field(default_factory=StrengthResult)
    moderation: ModerationStatus = Field(default_factory=ModerationIdle)
    preview_data_uri: Optional[str] = Field(default=None, repr=False)
    submit_status: SubmitStatus = SubmitStatus.PENDING
    registration_result: Optional[RegistrationResult] = None

    def field_values(self) -> Dict[str, object]:
        """Form fields that currently hold a value."""
        values = {}
        for name in FORM_FIELDS:
            value = getattr(self, name)
            if value is not None:
                values[name] = value
        return values

    @property
    def is_checking(self) -> bool:
        return isinstance(self.moderation, ModerationChecking)

    @property
    def image_rejected(self) -> bool:
        return isinstance(self.moderation, ModerationResolved) and not self.moderation.appropriate

    @property
    def field_errors(self) -> Dict[str, str]:
        """Inline errors: schema errors plus the moderation verdict on the picture."""
        errors = dict(self.validation_errors)
        if self.image_rejected and "profile_picture" not in errors:
            errors["profile_picture"] = self.moderation.result.reason or "Image is not work-appropriate."
        return errors
