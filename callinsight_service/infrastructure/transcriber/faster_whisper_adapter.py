from __future__ import annotations

import asyncio
import io

from ...domain.ports.transcriber_port import TranscriptionResult, TranscriberPort


class FasterWhisperTranscriberAdapter(TranscriberPort):
    def __init__(
        self,
        *,
        model_size: str,
        device: str,
        compute_type: str,
        beam_size: int = 2,
        vad_filter: bool = True,
    ):
        self.model_size = model_size
        self.device = device
        self.compute_type = compute_type
        self.beam_size = beam_size
        self.vad_filter = vad_filter
        self._model = None

    def _get_model(self):
        if self._model is None:
            from faster_whisper import WhisperModel  # delayed import

            self._model = WhisperModel(self.model_size, device=self.device, compute_type=self.compute_type)
        return self._model

    def _transcribe_sync(self, audio: bytes, language: str) -> TranscriptionResult:
        model = self._get_model()
        segments, info = model.transcribe(
            io.BytesIO(audio),
            language=language,
            beam_size=self.beam_size,
            vad_filter=self.vad_filter,
        )

        parts: list[str] = []
        for seg in segments:
            text = (getattr(seg, "text", "") or "").strip()
            if text:
                parts.append(text)

        duration = int(round(float(getattr(info, "duration", 0.0) or 0.0)))
        return TranscriptionResult(text=" ".join(parts), language=language, duration_sec=duration)

    async def transcribe(self, audio: bytes, *, language: str) -> TranscriptionResult:
        return await asyncio.to_thread(self._transcribe_sync, audio, language)
