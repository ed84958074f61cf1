from dataclasses import dataclass

from careerfit.core.config import Settings, settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    temperature: float
    max_output_tokens: int


def load_ai_config(cfg: Settings = settings) -> AIConfig:
    return AIConfig(
        provider=cfg.ai_provider,
        model=cfg.ai_model,
        temperature=cfg.ai_temperature,
        max_output_tokens=cfg.ai_max_output_tokens,
    )
