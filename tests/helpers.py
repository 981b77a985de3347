"""Test doubles and payload builders shared by the test modules."""

from httpx import AsyncClient, ASGITransport

from shortlink.errors import UpstreamFailureError
from shortlink.telegram.notifier import Notifier


class ScriptedRandom:
    """Random source returning pre-set codes, one per ``choices`` call."""

    def __init__(self, codes):
        self.codes = list(codes)
        self.calls = 0

    def choices(self, population, k):
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        assert len(code) == k
        assert all(c in population for c in code)
        return list(code)


class RecordingNotifier(Notifier):
    """Notifier that records what would have been sent."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def _record(self, kind, chat_id, **fields):
        if self.fail:
            raise UpstreamFailureError("Telegram sendMessage failed")
        self.sent.append({"kind": kind, "chat_id": chat_id, **fields})

    async def send_message(self, chat_id, text, buttons=()):
        await self._record("message", chat_id, text=text, buttons=list(buttons))

    async def send_photo(self, chat_id, photo, caption=None, buttons=()):
        await self._record("photo", chat_id, photo=photo, caption=caption, buttons=list(buttons))

    async def send_animation(self, chat_id, animation, caption=None, buttons=()):
        await self._record("animation", chat_id, animation=animation, caption=caption, buttons=list(buttons))


def telegram_update(text=None, chat_id=4242, **message_fields):
    """Build a minimal Telegram update payload."""
    message = {"message_id": 1, "chat": {"id": chat_id, "type": "private"}, **message_fields}
    if text is not None:
        message["text"] = text
    return {"update_id": 1000, "message": message}


def make_client(app) -> AsyncClient:
    """HTTP client talking to an ASGI app in-process."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
