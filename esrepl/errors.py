class ReplError(Exception):
    """Base class for errors reported on the error stream."""

    prefix = ""

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"{self.prefix}{reason}")


class InputReadError(ReplError):
    prefix = "error reading line: "


class CommandSyntaxError(ReplError):
    prefix = "bad url line: "


class BodyReadError(ReplError):
    prefix = "error reading body: "


class TranslationError(ReplError):
    """Body could not be turned into JSON. The reason already says which step failed."""


class RequestConstructionError(ReplError):
    prefix = "unable to create http request: "


class TransportError(ReplError):
    prefix = "error sending http request: "
