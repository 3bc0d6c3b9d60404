## Base LLM Client Interface
from abc import ABC, abstractmethod
from typing import Any, Mapping


class LLMClient(ABC):
    """The generation collaborator. Output text is untrusted."""

    system_prompt: str = "You are a helpful assistant that only answers with a single JSON object."

    @abstractmethod
    async def generate_text(self, * , system: str, user: str, temperature: float | None = None) -> str:
        raise NotImplementedError

    async def generate(self, template: str, variables: Mapping[str, Any], * ,
    system: str | None = None, temperature: float | None = None) -> str:
        """
        Render `template` with `variables` (str.format rules, so doubled braces
        stay literal) and send it as the user message.
        """
        user = template.format(**variables)
        return await self.generate_text(system=system or self.system_prompt, user=user,
        temperature=temperature)

    async def aclose(self) -> None:
        return None
