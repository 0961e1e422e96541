from __future__ import annotations

from ...domain.ports.generator_port import GeneratedText, StructuredGeneratorPort, TextGeneratorPort
from ...processing.analysis_contract import loads_json_object


class GeminiGenerationAdapter(StructuredGeneratorPort, TextGeneratorPort):
    def __init__(self, *, api_key: str | None, model: str):
        self.api_key = api_key
        self.model = model
        self._client = None

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("GEMINI_API_KEY is missing")
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate_structured(self, prompt: str, schema: dict) -> dict:
        from google.genai import types

        response = await self._get_client().aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return loads_json_object(getattr(response, "text", None) or "")

    async def generate_text(self, prompt: str, *, max_output_tokens: int) -> GeneratedText:
        from google.genai import types

        response = await self._get_client().aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(max_output_tokens=max_output_tokens),
        )
        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise RuntimeError("empty response from model")
        return GeneratedText(text=text)
