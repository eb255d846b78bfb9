"""Static registry of supported target IDEs and their URL protocol shapes.

Each ``IDEProfile`` describes how a VS Code family IDE is addressed
through its custom URL scheme: which prefix shape it expects, whether it
handles ``{scheme}:extension/{id}`` and ``{scheme}:mcp/...`` links on its
own, and where its executable is installed by default on Windows.

Prefix shapes differ between IDEs. Antigravity registers links of the
form ``antigravity://...``; the others accept ``cursor:...``,
``windsurf:...`` and so on. Callers must always go through
``TargetProtocol.prefix`` rather than formatting a template themselves.

Platform Notes:
    Install paths are Windows-only. ``%LOCALAPPDATA%`` entries are
    stored with the literal placeholder and expanded against the caller's
    environment by the registration helper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Every scheme whose links are intercepted, including competing IDEs that
# cannot themselves be selected as a target.
INTERCEPTED_SCHEMES: tuple[str, ...] = (
    "vscode",
    "vscode-insiders",
    "antigravity",
    "cursor",
    "windsurf",
    "vscodium",
)

# Schemes that emit ``{scheme}:mcp/...`` install links.
MCP_SCHEMES: tuple[str, ...] = ("vscode", "vscode-insiders")

LOCALAPPDATA = "%LOCALAPPDATA%"


class TargetProtocol(str, Enum):
    """The IDEs a user can route links to.

    The string value is both the URL scheme and the persisted settings
    value.
    """

    VSCODE = "vscode"
    VSCODE_INSIDERS = "vscode-insiders"
    ANTIGRAVITY = "antigravity"
    CURSOR = "cursor"
    WINDSURF = "windsurf"

    @classmethod
    def default(cls) -> TargetProtocol:
        return cls.ANTIGRAVITY

    @classmethod
    def coerce(cls, value: object) -> TargetProtocol:
        """Return the matching member, or the default for anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.default()

    @property
    def scheme(self) -> str:
        return self.value

    @property
    def prefix(self) -> str:
        """URL prefix this IDE expects, e.g. ``antigravity://`` or ``cursor:``."""
        return f"{self.value}://" if self is TargetProtocol.ANTIGRAVITY else f"{self.value}:"

    @property
    def profile(self) -> IDEProfile:
        return IDE_PROFILES[self]

    @property
    def supports_extension_links(self) -> bool:
        return self.profile.extension_links

    @property
    def supports_mcp_links(self) -> bool:
        return self.profile.mcp_links

    def owns(self, url: str) -> bool:
        """Whether *url* already uses this protocol's scheme."""
        return url.startswith(f"{self.value}:")


@dataclass(frozen=True)
class IDEProfile:
    """Describes how one IDE is addressed through its URL scheme.

    Attributes:
        name: Human-readable display name (e.g., "Cursor").
        protocol: The ``TargetProtocol`` this profile belongs to.
        extension_links: Handles ``{scheme}:extension/{id}`` natively.
        mcp_links: Handles ``{scheme}:mcp/...`` install links natively.
        install_paths: Default Windows executable locations, in the order
            they are checked.
    """

    name: str
    protocol: TargetProtocol
    extension_links: bool = False
    mcp_links: bool = True
    install_paths: list[str] = field(default_factory=list)


def _build_profiles() -> dict[TargetProtocol, IDEProfile]:
    """Build the profile table for every selectable target."""
    profiles = [
        IDEProfile(
            name="Antigravity",
            protocol=TargetProtocol.ANTIGRAVITY,
            mcp_links=False,
            install_paths=[
                LOCALAPPDATA + r"\Programs\Antigravity\Antigravity.exe",
                r"C:\Program Files\Antigravity\Antigravity.exe",
                r"C:\Dev\bin\Antigravity.exe",
            ],
        ),
        IDEProfile(
            name="Cursor",
            protocol=TargetProtocol.CURSOR,
            install_paths=[
                LOCALAPPDATA + r"\Programs\Cursor\Cursor.exe",
                LOCALAPPDATA + r"\cursor\Cursor.exe",
            ],
        ),
        IDEProfile(
            name="Windsurf",
            protocol=TargetProtocol.WINDSURF,
            install_paths=[
                LOCALAPPDATA + r"\Programs\Windsurf\Windsurf.exe",
                r"C:\Program Files\Windsurf\Windsurf.exe",
            ],
        ),
        IDEProfile(
            name="VS Code",
            protocol=TargetProtocol.VSCODE,
            extension_links=True,
            install_paths=[
                LOCALAPPDATA + r"\Programs\Microsoft VS Code\Code.exe",
                r"C:\Program Files\Microsoft VS Code\Code.exe",
            ],
        ),
        IDEProfile(
            name="VS Code Insiders",
            protocol=TargetProtocol.VSCODE_INSIDERS,
            extension_links=True,
            install_paths=[
                LOCALAPPDATA + r"\Programs\Microsoft VS Code Insiders\Code - Insiders.exe",
                r"C:\Program Files\Microsoft VS Code Insiders\Code - Insiders.exe",
            ],
        ),
    ]
    return {p.protocol: p for p in profiles}


# Module-level constant: one profile per selectable target.
IDE_PROFILES: dict[TargetProtocol, IDEProfile] = _build_profiles()


def split_scheme(url: str) -> tuple[str, str] | None:
    """Split *url* on its first intercepted ``{scheme}:`` prefix.

    Returns:
        ``(scheme, remainder)`` or ``None`` when the URL does not start
        with an intercepted scheme.
    """
    for scheme in INTERCEPTED_SCHEMES:
        head = f"{scheme}:"
        if url.startswith(head):
            return scheme, url[len(head):]
    return None


def swap_scheme(url: str, target: TargetProtocol) -> str:
    """Replace the intercepted scheme of *url* with *target*'s prefix.

    Everything after the scheme delimiter is kept verbatim, except that a
    leading ``//`` is not repeated when the target prefix already ends in
    one (``vscode://file/x`` becomes ``antigravity://file/x``). URLs that
    do not start with an intercepted scheme are returned unchanged.
    """
    parts = split_scheme(url)
    if parts is None:
        return url
    _, rest = parts
    if target.prefix.endswith("//") and rest.startswith("//"):
        rest = rest[2:]
    return f"{target.prefix}{rest}"
