import enum
from dataclasses import dataclass
from typing import Optional

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9200


class VerbCase(enum.Enum):
    UPPER = "upper"
    LOWER = "lower"

    def apply(self, verb: str) -> str:
        return verb.upper() if self is VerbCase.UPPER else verb.lower()


@dataclass(frozen=True)
class Config:
    """Settings for one shell session, built once at startup."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    translate_body: bool = True
    verb_case: VerbCase = VerbCase.UPPER
    form_header: bool = True
    timeout: Optional[float] = None

    @classmethod
    def raw(cls, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
            timeout: Optional[float] = None) -> "Config":
        """Bodies are forwarded untouched, verbs lowercased, no form header."""
        return cls(host=host, port=port, translate_body=False,
                   verb_case=VerbCase.LOWER, form_header=False, timeout=timeout)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def url_for(self, path: str) -> str:
        sep = "&" if "?" in path else "?"
        return f"{self.base_url}/{path}{sep}pretty"
