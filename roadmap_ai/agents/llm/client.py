from roadmap_ai.settings import Settings, settings as default_settings
from roadmap_ai.agents.llm.base import LLMClient
from roadmap_ai.agents.llm.ollama import OllamaOpenAIClient
from roadmap_ai.agents.llm.groq import GroqOpenAIClient

def get_llm_client(settings: Settings = default_settings) -> LLMClient:
    if settings.LLM_PROVIDER.lower() == "groq":
        return GroqOpenAIClient(
            api_key=settings.GROQ_API_KEY,
            base_url=settings.GROQ_BASE_URL,
            model=settings.GROQ_MODEL,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds,
        )

    return OllamaOpenAIClient(
        base_url = settings.ollama_base_url,
        model = settings.ollama_model,
        temperature = settings.llm_temperature,
        max_tokens = settings.llm_max_tokens,
        timeout = settings.llm_timeout_seconds,
    )
