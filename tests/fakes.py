from __future__ import annotations

from typing import List, Optional

from fitplan.services.completion import CompletionError


class FakeCompletionClient:
    """
    Deterministic stand-in for the completion service.

    Returns ``reply`` for every call, or raises ``CompletionError`` when
    ``fail`` is set. Calls are captured for assertions.
    """

    def __init__(self, reply: Optional[str] = "", *, fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: List[dict] = []

    @property
    def configured(self) -> bool:
        return True

    def complete(self, prompt: str, *, json_response: bool = False) -> str:
        self.calls.append({"prompt": prompt, "json_response": json_response})
        if self.fail:
            raise CompletionError("upstream unavailable")
        return self.reply or ""
