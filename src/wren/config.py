"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Override what you need::

        config = AppConfig(debug=True, max_content_length=1024 * 1024)
    """

    # Show tracebacks in 500 responses
    debug: bool = False

    # Seeded into every response before the handler runs
    server_name: str = "wren"
    default_headers: tuple[tuple[str, str], ...] = (
        ("Content-Type", "text/html; charset=utf-8"),
    )

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB
