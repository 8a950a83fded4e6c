from typing import NamedTuple, Union

from esrepl.config import VerbCase
from esrepl.errors import CommandSyntaxError

VERBS = ("GET", "POST", "PUT", "DELETE")


class Command(NamedTuple):
    verb: str
    path: str


def parse_command(line: Union[bytes, str], verb_case: VerbCase = VerbCase.UPPER) -> Command:
    """Parse a ``<verb> <path>`` line.

    The verb is matched case-insensitively and returned in ``verb_case``.
    The path is trimmed and loses at most one leading slash.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CommandSyntaxError(f"invalid utf-8: {exc}") from exc

    parts = line.split(" ", 1)
    if len(parts) != 2:
        raise CommandSyntaxError(
            f"wrong number of url line parts. found {len(parts)}, expected 2")
    verb, path = parts

    if verb.upper() not in VERBS:
        raise CommandSyntaxError(f"illegal verb: {verb.upper()}")

    path = path.strip()
    if path.startswith("/"):
        path = path[1:]
    return Command(verb_case.apply(verb), path)
