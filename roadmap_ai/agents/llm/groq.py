from openai import AsyncOpenAI
from .base import LLMClient

class GroqOpenAIClient(LLMClient):
    def __init__(self, * , api_key: str | None, base_url: str, model: str,
    temperature: float = 0.3, max_tokens: int = 4096, timeout: float = 60.0):
        # Without a key the client still builds; every call then fails as a config error.
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout,
        max_retries=0) if api_key else None
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate_text(self, *, system: str, user: str, temperature: float | None = None) -> str:
        if self.client is None:
            raise RuntimeError("GROQ_API_KEY is not set: missing API key for the generation provider")

        resp = await self.client.chat.completions.create(
            model=self.model,
            temperature=self.temperature if temperature is None else temperature,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
        content = resp.choices[0].message.content
        if not content:
            raise RuntimeError("Generation failed: provider returned an empty completion")
        return content.strip()

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.close()
