"""IDE Switcher: Route vscode:// family links to the IDE you actually use."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
