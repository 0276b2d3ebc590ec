import logging

from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import AppConfig
from moderation.schemas import ImageCheckResult

logger = logging.getLogger(__name__)

INSTRUCTION = (
    "You are an AI that determines whether an image is work-appropriate. "
    '"Work-appropriate" means that the image is suitable for display in a professional '
    "environment, and does not contain nudity, violence, or other offensive content.\n\n"
    "Analyze the following image and determine if it is work-appropriate. "
    "If it is not, explain why."
)


def build_prompt() -> ChatPromptTemplate:
    return ChatPromptTemplate.from_messages(
        [
            ("system", INSTRUCTION),
            (
                "human",
                [
                    {"type": "text", "text": "Image:"},
                    {"type": "image_url", "image_url": {"url": "{photo_data_uri}"}},
                ],
            ),
        ]
    )


def build_classifier(config: AppConfig) -> Runnable:
    """
    prompt | Gemini chat model, with output parsed into ImageCheckResult.
    Input: {"photo_data_uri": "data:<mimetype>;base64,<data>"}.
    """
    if not config.google_api_key:
        raise RuntimeError("GOOGLE_API_KEY missing in .env")

    llm = ChatGoogleGenerativeAI(
        model=config.moderation_model,
        google_api_key=config.google_api_key,
        temperature=0,
    )
    logger.info("Image moderation using model %s", config.moderation_model)
    return build_prompt() | llm.with_structured_output(ImageCheckResult)
