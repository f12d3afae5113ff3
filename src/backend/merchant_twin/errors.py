from __future__ import annotations


class TwinError(Exception):
    """Base class for merchant twin errors."""


class UnknownActionError(TwinError, KeyError):
    def __init__(self, action_key: str):
        super().__init__(action_key)
        self.action_key = action_key

    def __str__(self) -> str:
        return f"Unknown action key: {self.action_key!r}"


class InvalidMerchantStateError(TwinError, ValueError):
    def __init__(self, message: str, *, merchant_id: str | None = None, problems: list[str] | None = None):
        super().__init__(message)
        self.merchant_id = merchant_id
        self.problems = list(problems or [])
