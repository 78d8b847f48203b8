from __future__ import annotations

import asyncio
import logging
import threading
from typing import Optional

from sleuth.constants import QUESTION_SAMPLE_CHARS
from sleuth.prompts import build_language_prompt
from sleuth.provider.base import StructuredGenerator
from sleuth.schemas import LanguageDetectionV1
from sleuth.telemetry import timed
from sleuth.types import DEFAULT_LANGUAGE, LanguageSetting

logger = logging.getLogger(__name__)


class LanguageProfile:
    """Language code and style for one session, resolved once in the background.

    Construction does no I/O and leaves the profile on its defaults. ``start()``
    schedules the single detection task (from a running event loop) and
    ``await resolve()`` waits for it. Callers that never await simply keep
    reading the defaults until the task publishes.

    The resolved pair is published as one ``LanguageSetting`` reference, at
    most once, so readers see either the defaults or the full detected pair.
    A failed detection leaves the defaults in place for good.
    """

    def __init__(
        self,
        question: str,
        generator: Optional[StructuredGenerator] = None,
        *,
        default: LanguageSetting = DEFAULT_LANGUAGE,
        role: str = "evaluator",
    ) -> None:
        self._sample = (question or "")[:QUESTION_SAMPLE_CHARS]
        self._generator = generator
        self._default = default
        self._role = role
        self._resolved: Optional[LanguageSetting] = None
        self._publish_lock = threading.Lock()
        self._task: Optional["asyncio.Task[None]"] = None

    @classmethod
    def launch(cls, question: str, generator: StructuredGenerator, **kwargs) -> "LanguageProfile":
        """Create a profile and start its detection task on the running loop."""

        profile = cls(question, generator, **kwargs)
        profile.start()
        return profile

    @classmethod
    def resolved(cls, code: str, style: str) -> "LanguageProfile":
        """Profile that is already resolved to ``(code, style)``; never detects."""

        profile = cls("")
        profile.publish(LanguageSetting(code=code, style=style))
        return profile

    @property
    def question_sample(self) -> str:
        return self._sample

    @property
    def setting(self) -> LanguageSetting:
        resolved = self._resolved
        return resolved if resolved is not None else self._default

    @property
    def language_code(self) -> str:
        return self.setting.code

    @property
    def language_style(self) -> str:
        return self.setting.style

    @property
    def is_resolved(self) -> bool:
        return self._resolved is not None

    def directive(self) -> str:
        """Localization directive for the current best-known language."""

        return self.setting.directive()

    def publish(self, setting: LanguageSetting) -> bool:
        """Publish the resolved pair; later calls are ignored. Returns True if published."""

        with self._publish_lock:
            if self._resolved is not None:
                return False
            self._resolved = setting
            return True

    def start(self) -> "asyncio.Task[None]":
        """Schedule the detection task once; repeated calls return the same task."""

        if self._task is None:
            loop = asyncio.get_running_loop()
            self._task = loop.create_task(self._detect(), name="language-profile-detect")
        return self._task

    async def resolve(self) -> LanguageSetting:
        """Wait for detection to finish and return the setting in effect. Never raises."""

        if self.is_resolved and self._task is None:
            return self.setting
        await self.start()
        return self.setting

    async def _detect(self) -> None:
        if self._generator is None:
            logger.debug("language profile has no generator; keeping %s", self._default)
            return
        prompt = build_language_prompt(self._sample).render()
        ctx = {"generator": getattr(self._generator, "name", type(self._generator).__name__)}
        try:
            with timed("language_detect", ctx):
                result = await self._generator.generate(role=self._role, schema=LanguageDetectionV1, prompt=prompt)
                detected = LanguageDetectionV1.model_validate(result, from_attributes=True)
        except Exception as exc:
            logger.warning("language detection failed; keeping %s/%s: %s", self._default.code, self._default.style, exc)
            return
        if self.publish(LanguageSetting(code=detected.langCode, style=detected.langStyle)):
            logger.info("language resolved: lang=%s style=%s", detected.langCode, detected.langStyle)


__all__ = ["LanguageProfile"]
