from typing import Literal, NamedTuple, Optional, Protocol


class ConfigurationParameters(Protocol):
    """Read-only view over the host's configuration."""

    def get(self, key: str) -> Optional[str]:
        pass  # pragma: no cover


class CaseIdentifier(NamedTuple):
    unique_id: str
    is_test: bool


Outcome = Literal["passed", "failed", "skipped", "error"]
