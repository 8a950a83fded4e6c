import io

import pytest
import requests

from esrepl.config import Config
from esrepl.repl import Repl


class FakeRaw(io.BytesIO):
    released = False

    def release_conn(self):
        self.released = True


class BrokenRaw(FakeRaw):
    """Yields one chunk, then fails like a dropped connection."""

    def read(self, size=-1):
        if self.tell() == 0:
            return super().read(size)
        raise requests.ConnectionError("connection reset")


class RecordingAdapter(requests.adapters.BaseAdapter):
    """Transport adapter that records requests and replays canned replies.

    A reply is either ``(status, body)``, a raw object, or an exception to raise.
    """

    def __init__(self, *replies):
        super().__init__()
        self.replies = list(replies)
        self.requests = []
        self.raws = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        reply = self.replies.pop(0) if self.replies else (200, b"{}")
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, FakeRaw):
            status, raw = 200, reply
        else:
            status, body = reply
            raw = FakeRaw(body)
        self.raws.append(raw)

        response = requests.Response()
        response.status_code = status
        response.raw = raw
        response.request = request
        response.url = request.url
        return response

    def close(self):
        pass


class Result:
    def __init__(self, adapter, stdout, stderr, sent):
        self.adapter = adapter
        self.stdout = stdout.getvalue()
        self.stderr = stderr.getvalue()
        self.sent = sent

    @property
    def requests(self):
        return self.adapter.requests


@pytest.fixture
def run_repl():
    def run(data, *replies, config=None):
        adapter = RecordingAdapter(*replies)
        session = requests.Session()
        session.mount("http://", adapter)
        stdout, stderr = io.BytesIO(), io.BytesIO()
        repl = Repl(config or Config(), io.BytesIO(data), stdout, stderr, session=session)
        with repl:
            sent = repl.run()
        return Result(adapter, stdout, stderr, sent)

    return run
