import os
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

from starthub_steps.config import CREDENTIAL_SOURCES


@dataclass(frozen=True)
class CredentialSource:
    kind: str  # "param" or "env"
    name: str

    def describe(self) -> str:
        return f"params.{self.name}" if self.kind == "param" else f"${self.name}"


DEFAULT_SOURCES: Tuple[CredentialSource, ...] = tuple(
    CredentialSource(kind, name) for kind, name in CREDENTIAL_SOURCES
)


class CredentialMissingError(RuntimeError):
    def __init__(self, sources: Iterable[CredentialSource]):
        self.sources = tuple(sources)
        consulted = ", ".join(s.describe() for s in self.sources) or "<none>"
        super().__init__(f"No API token found (checked {consulted})")


def _lookup(source: CredentialSource, params: Mapping[str, Any], environ: Mapping[str, str]) -> Optional[str]:
    if source.kind == "param":
        value = params.get(source.name) if isinstance(params, Mapping) else None
    elif source.kind == "env":
        value = environ.get(source.name)
    else:
        raise ValueError(f"Unknown credential source kind {source.kind!r}")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def resolve_credential(
    params: Mapping[str, Any],
    sources: Iterable[CredentialSource] = DEFAULT_SOURCES,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    environ = os.environ if environ is None else environ
    sources = tuple(sources)
    for source in sources:
        token = _lookup(source, params, environ)
        if token:
            return token
    raise CredentialMissingError(sources)
