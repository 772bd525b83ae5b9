"""Fake transport for testing.

Replays a script of responses, exceptions and hangs, and records every
request it receives.
"""

import asyncio
import json as jsonlib
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

HANG = object()  # script entry: never resolve

ScriptEntry = Union[httpx.Response, BaseException, object]


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: Dict[str, str]
    json: Optional[Any]


class FakeTransport:
    """In-memory fake for the Transport protocol.

    Usage:
        fake = FakeTransport()
        fake.seed_status(503)
        fake.seed_json({"success": True})

        executor = RequestExecutor(fake, sleep=...)
        await executor.execute("GET", url, headers={})
        assert fake.call_count == 2

    When the script runs out, the last entry is repeated.
    """

    HANG = HANG

    def __init__(self, *entries: ScriptEntry) -> None:
        self._script: List[ScriptEntry] = list(entries)
        self._last: Optional[ScriptEntry] = None
        self.requests: List[RecordedRequest] = []

    # -- seeding helpers --

    def seed(self, entry: ScriptEntry) -> "FakeTransport":
        self._script.append(entry)
        return self

    def seed_json(self, body: Any, status_code: int = 200) -> "FakeTransport":
        return self.seed(httpx.Response(status_code, json=body))

    def seed_text(self, text: str, status_code: int = 200) -> "FakeTransport":
        return self.seed(httpx.Response(status_code, text=text))

    def seed_status(self, status_code: int, text: str = "") -> "FakeTransport":
        return self.seed(httpx.Response(status_code, text=text))

    def seed_error(self, error: BaseException) -> "FakeTransport":
        return self.seed(error)

    def seed_hang(self) -> "FakeTransport":
        return self.seed(HANG)

    # -- Transport protocol --

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Optional[Any] = None,
    ) -> httpx.Response:
        # Round-trip through JSON so tests see exactly what goes on the wire.
        body = jsonlib.loads(jsonlib.dumps(json)) if json is not None else None
        self.requests.append(RecordedRequest(method, url, dict(headers), body))

        if self._script:
            entry = self._script.pop(0)
        elif self._last is not None:
            entry = self._last
        else:
            raise AssertionError("FakeTransport has no scripted response")
        self._last = entry

        if entry is HANG:
            await asyncio.Event().wait()
        if isinstance(entry, BaseException):
            raise entry
        return entry

    # -- assertions --

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]
