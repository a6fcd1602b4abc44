"""Cookie header parsing and ``Set-Cookie`` directives."""

from dataclasses import dataclass


def parse_cookies(header: str) -> dict[str, str]:
    """Map cookie names to values from a ``Cookie`` header.

    Pairs without ``=`` are skipped and double-quoted values are unwrapped.
    Later duplicates win.
    """
    cookies: dict[str, str] = {}
    for chunk in header.split(";") if header else ():
        name, sep, value = chunk.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[name] = value
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """One cookie a Response asks the client to store or delete."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    secure: bool = False
    httponly: bool = True
    samesite: str = "strict"

    @classmethod
    def expired(cls, name: str, path: str = "/") -> "SetCookie":
        """A directive that deletes *name* on the client."""
        return cls(name=name, value="", max_age=0, path=path)

    def to_header_value(self) -> str:
        attributes = [
            f"Max-Age={self.max_age}" if self.max_age is not None else "",
            f"Path={self.path}" if self.path else "",
            "Secure" if self.secure else "",
            "HttpOnly" if self.httponly else "",
            f"SameSite={self.samesite}" if self.samesite else "",
        ]
        return "; ".join([f"{self.name}={self.value}", *filter(None, attributes)])
