from typing import Protocol


class SecretStore(Protocol):
    """
    SecretStore holds the GitHub token. Absence of a token is a
    normal state, get() then returns None.
    """

    async def get(self) -> "str | None": ...

    async def store(self, value: "str") -> "None": ...

    async def delete(self) -> "None": ...


class MemorySecretStore:
    """
    keeps the token for the lifetime of the process only.
    """

    def __init__(self, initial: "str | None" = None) -> "None":
        self._value: "str | None" = initial or None

    async def get(self) -> "str | None":
        return self._value

    async def store(self, value: "str") -> "None":
        self._value = value

    async def delete(self) -> "None":
        self._value = None
