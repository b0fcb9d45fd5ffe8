"""
ai — Copilot SDK integration for drafting issue bodies.

The generator is built only when `create --ai` is used and handed to the
create flow. Every failure here is soft: callers get None and fall back to
manual entry.
"""

import asyncio
from types import SimpleNamespace

from .config import AI_MODEL, AI_TIMEOUT, AI_WORD_BUDGET
from .ui import error


class GeneratorUnavailable(RuntimeError):
    """The text generator could not be constructed."""


BODY_PROMPT = """Write a brief GitHub issue description for the following title: "{title}".
Include sections for:
- Problem/Feature description
- Proposed solution
Format in Markdown, but don't wrap in code blocks.
Keep it under {budget} words."""

SYSTEM_PROMPT = """You draft GitHub issue descriptions for a developer working in a terminal.
Reply with the description only: no preamble, no commentary, no questions."""


def _load_sdk():
    try:
        from copilot import CopilotClient
        from copilot.generated.session_events import SessionEventType
    except ModuleNotFoundError as exc:
        raise GeneratorUnavailable(
            "The 'copilot' SDK is not installed in this Python environment. "
            "Install it with: pip install 'ghi[ai]'"
        ) from exc
    return SimpleNamespace(CopilotClient=CopilotClient, SessionEventType=SessionEventType)


def strip_fences(text):
    """Drop a surrounding Markdown code fence, if the model added one."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


class TextGenerator:
    """One prompt in, one issue body out."""

    def __init__(self, model=AI_MODEL, *, timeout=AI_TIMEOUT,
                 word_budget=AI_WORD_BUDGET, sdk=None):
        self.model = model
        self.timeout = timeout
        self.word_budget = word_budget
        self._sdk = sdk or _load_sdk()

    def build_prompt(self, title):
        return BODY_PROMPT.format(title=title, budget=self.word_budget)

    async def generate_body(self, title):
        """Return a Markdown body for `title`, or None if generation failed."""
        try:
            raw = await asyncio.wait_for(self._complete(self.build_prompt(title)),
                                         timeout=self.timeout)
        except asyncio.TimeoutError:
            error(f"Failed to generate issue body: timed out after {self.timeout:g}s")
            return None
        except Exception as exc:
            error(f"Failed to generate issue body: {exc}")
            return None

        if not isinstance(raw, str):
            error("Failed to generate issue body: malformed response")
            return None
        body = strip_fences(raw)
        if not body:
            error("Failed to generate issue body: empty response")
            return None
        return body

    async def _complete(self, user_prompt):
        """Send a single prompt and collect the streamed reply."""
        events = self._sdk.SessionEventType
        client = self._sdk.CopilotClient()
        await client.start()
        try:
            session = await client.create_session({
                "model": self.model,
                "streaming": True,
                "system_message": {"content": SYSTEM_PROMPT},
            })
            try:
                chunks = []
                failure = []
                done = asyncio.Event()

                def on_event(event):
                    if event.type == events.ASSISTANT_MESSAGE_DELTA:
                        delta = getattr(event.data, "delta_content", None) or ""
                        if delta:
                            chunks.append(delta)
                    elif event.type == events.SESSION_IDLE:
                        done.set()
                    elif event.type == events.SESSION_ERROR:
                        failure.append(getattr(event.data, "message", str(event.data)))
                        done.set()

                session.on(on_event)
                await session.send({"prompt": user_prompt})
                await done.wait()
            finally:
                await session.destroy()
        finally:
            await client.stop()

        if failure:
            raise RuntimeError(failure[0])
        return "".join(chunks)
