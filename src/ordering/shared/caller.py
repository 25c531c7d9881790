"""Caller identity passed explicitly into every downstream call."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CallerIdentity:
    """The credential of whoever issued the current command.

    Downstream services authorise reservation and payment calls with it, so
    every gateway method takes one instead of reading ambient state.
    """

    token: str | None = None

    @classmethod
    def from_token(cls, token: str | None) -> "CallerIdentity":
        if token and token.lower().startswith("bearer "):
            token = token[len("bearer ") :]
        return cls(token=token or None)

    @classmethod
    def anonymous(cls) -> "CallerIdentity":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
