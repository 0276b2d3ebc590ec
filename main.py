import asyncio
import mimetypes
import sys
from pathlib import Path
from typing import Optional

from config.log import setup_logging
from config.settings import AppConfig
from moderation.client import ModerationClient
from moderation.model import build_classifier
from registration.actions import StubRegistrationBackend
from registration.controller import FormController
from registration.notifications import CollectingNotifier
from registration.state import ProfilePicture


async def run(picture_path: Optional[Path]) -> None:
    patches = [
        {"full_name": "K", "email": "khushi@gmail", "password": "abc"},
        {"full_name": "Khushi", "email": "khushi@gmail.com", "password": "Abcdefg1!"},
        {"confirm_password": "Abcdefg1!", "dob": "2004-01-01", "gender": "female", "terms": True},
    ]

    # load app config
    cfg = AppConfig.from_env()
    setup_logging(cfg.log_level)

    # build moderation client + controller
    client = ModerationClient(build_classifier(cfg))
    notifier = CollectingNotifier()
    controller = FormController(
        moderation_client=client,
        backend=StubRegistrationBackend(delay=cfg.registration_delay_seconds),
        notifier=notifier,
    )

    # apply field edits
    for i, patch in enumerate(patches, 1):
        for name, value in patch.items():
            controller.set_field(name, value)
        state = controller.state
        print(f"\nPATCH #{i}")
        print("strength:", state.password_strength.label or "-")
        print("errors:", state.field_errors)

    # choose a picture
    if picture_path is not None:
        content_type = mimetypes.guess_type(picture_path.name)[0] or "application/octet-stream"
        picture = ProfilePicture(
            filename=picture_path.name,
            content_type=content_type,
            data=picture_path.read_bytes(),
        )
        state = await controller.select_picture(picture)
        print("\nmoderation:", state.moderation)

    # submit
    status = await controller.submit()
    print("\nsubmit:", status.value)
    print("errors:", controller.state.field_errors)
    for n in notifier.notifications:
        print(f"notification [{n.variant}] {n.title}: {n.description or ''}")


def main():
    picture_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    asyncio.run(run(picture_path))


if __name__ == "__main__":
    main()
