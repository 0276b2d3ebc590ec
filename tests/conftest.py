import pytest

from moderation.schemas import ImageCheckResult
from registration.state import FormState, ModerationResolved, ProfilePicture


def make_picture(data: bytes = b"\x89PNG fake image", content_type: str = "image/png", filename: str = "me.png"):
    return ProfilePicture(filename=filename, content_type=content_type, data=data)


@pytest.fixture
def picture() -> ProfilePicture:
    return make_picture()


@pytest.fixture
def valid_state(picture) -> FormState:
    return FormState(
        full_name="Khushi",
        email="khushi@gmail.com",
        password="Abcdefg1!",
        confirm_password="Abcdefg1!",
        dob="2000-01-01",
        gender="female",
        profile_picture=picture,
        terms=True,
        moderation=ModerationResolved(sequence=1, result=ImageCheckResult(is_work_appropriate=True)),
    )
