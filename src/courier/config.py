"""Dispatcher and navigation configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DispatchConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DispatchConfig(debug=True)
    """

    # Include exception type and message in 500 bodies
    debug: bool = False

    # Fallback bodies when no hook is registered
    not_found_body: str = "Not Found"
    error_body: str = "Internal Server Error"


@dataclass(frozen=True, slots=True)
class NavigationConfig:
    """Client-side navigation configuration.

    Attributes:
        root: Mount point of the single-page app. In-app paths are
            resolved relative to it (``root="/app/"`` maps ``/orders``
            to the browser URL ``/app/orders``).
        origin: ``scheme://host[:port]`` of the page. Absolute links are
            only intercepted when their origin equals this value; with
            ``None`` every absolute link is treated as external.
        discard_stale: When True, only the most recently started
            navigation may update ``current_route``. When False (default),
            whichever overlapping navigation resolves last wins.
    """

    root: str = "/"
    origin: str | None = None
    discard_stale: bool = False
