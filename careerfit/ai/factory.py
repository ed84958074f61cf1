from careerfit.ai.config import load_ai_config
from careerfit.ai.types import ModelClient
from careerfit.ai.providers.openai_provider import OpenAIProvider
from careerfit.core.config import Settings, settings


def get_model_client(cfg: Settings = settings) -> ModelClient:
    ai = load_ai_config(cfg)

    if ai.provider == "openai":
        return OpenAIProvider(
            model=ai.model,
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url,
            timeout_s=cfg.openai_timeout_s,
            max_retries=cfg.openai_max_retries,
            temperature=ai.temperature,
            max_output_tokens=ai.max_output_tokens,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{ai.provider}'")
