import logging
from typing import BinaryIO, Optional

import requests

from esrepl.command import Command, parse_command
from esrepl.config import Config
from esrepl.errors import (
    BodyReadError,
    InputReadError,
    ReplError,
    RequestConstructionError,
    TransportError,
)
from esrepl.translate import passthrough, translate

log = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
CHUNK_SIZE = 8192


class EndOfInput(Exception):
    """Input stream is exhausted or unreadable; the loop stops."""


class Repl:
    """Reads commands from ``stdin`` and sends them to the configured host.

    Successful response bodies go to ``stdout``; everything else, including
    local errors, goes to ``stderr``. All three streams are binary.
    """

    def __init__(self, config: Config, stdin: BinaryIO, stdout: BinaryIO,
                 stderr: BinaryIO, session: Optional[requests.Session] = None):
        self.config = config
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.session = session if session is not None else requests.Session()
        self.translate = translate if config.translate_body else passthrough
        self.body = bytearray()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self.session.close()

    def run(self) -> int:
        """Process commands until input runs out. Returns the number sent."""
        sent = 0
        while True:
            try:
                line = self.read_command_line()
            except EndOfInput:
                break
            except InputReadError as err:
                self.errorf(str(err))
                break
            if not line.strip():
                continue

            try:
                command = parse_command(line, self.config.verb_case)
                self.read_body()
                payload = self.translate(bytes(self.body))
                request = self.prepare(command, payload)
                self.send(request)
                sent += 1
            except ReplError as err:
                log.debug("%s: %r", type(err).__name__, err.reason)
                self.errorf(str(err))
            finally:
                self.flush()

        log.debug("input exhausted after %d request(s)", sent)
        return sent

    def read_command_line(self) -> bytes:
        try:
            line = self.stdin.readline()
        except OSError as exc:
            raise InputReadError(exc) from exc
        if not line:
            raise EndOfInput()
        if not line.endswith(b"\n"):
            raise InputReadError("unexpected end of input")
        return line

    def read_body(self) -> None:
        self.body.clear()
        while True:
            try:
                line = self.stdin.readline()
            except OSError as exc:
                raise BodyReadError(exc) from exc
            if not line.endswith(b"\n"):
                raise BodyReadError("unexpected end of input")
            if not line.strip():
                return
            self.body.extend(line)

    def prepare(self, command: Command, payload: bytes) -> requests.PreparedRequest:
        headers = {}
        if self.config.form_header:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        url = self.config.url_for(command.path)
        try:
            prepared = self.session.prepare_request(
                requests.Request(command.verb, url, data=payload, headers=headers))
        except (requests.RequestException, ValueError) as exc:
            raise RequestConstructionError(exc) from exc
        # prepare_request upper-cases the method
        prepared.method = command.verb
        return prepared

    def send(self, request: requests.PreparedRequest) -> None:
        log.debug("sending %s %s (%d byte body)", request.method, request.url,
                  len(request.body or b""))
        try:
            response = self.session.send(request, stream=True,
                                         timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise TransportError(exc) from exc
        self.dump_response(response)

    def dump_response(self, response: requests.Response) -> None:
        with response:
            log.info("%s %s -> %d", response.request.method, response.url,
                     response.status_code)
            if 200 <= response.status_code <= 299:
                out = self.stdout
            else:
                out = self.stderr
                out.write(b"Status: %d\n" % response.status_code)
            try:
                for chunk in response.iter_content(CHUNK_SIZE):
                    out.write(chunk)
            except requests.RequestException as exc:
                raise TransportError(exc) from exc
            finally:
                out.write(b"\n")

    def errorf(self, msg: str) -> None:
        if not msg.endswith("\n"):
            msg += "\n"
        self.stderr.write(msg.encode("utf-8", "replace"))

    def flush(self) -> None:
        for stream in (self.stdout, self.stderr):
            stream.flush()
