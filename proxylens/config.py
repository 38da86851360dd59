"""
ProxyLens Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Immutable presentation settings."""

    # --- Structured signals ---
    MAX_DEPTH: int = int(os.getenv("PROXYLENS_MAX_DEPTH", "3"))
    PRECISION: int = int(os.getenv("PROXYLENS_PRECISION", "10"))
    PLACEHOLDER: str = os.getenv("PROXYLENS_PLACEHOLDER", "—")

    # Kind context that turns on key prioritisation (components first)
    OVERALL_KIND: str = os.getenv("PROXYLENS_OVERALL_KIND", "overall")

    # --- Highlighting ---
    STANDARD_HEADERS: tuple[str, ...] = field(
        default_factory=lambda: _csv(
            os.getenv(
                "PROXYLENS_STANDARD_HEADERS",
                "USER-AGENT,HOST,ACCEPT,ACCEPT-ENCODING",
            )
        )
    )
    MARK_TAG: str = os.getenv("PROXYLENS_MARK_TAG", "mark")
    HIGHLIGHT_BUDGET_MS: float = float(
        os.getenv("PROXYLENS_HIGHLIGHT_BUDGET_MS", "250")
    )
    HIGHLIGHT_MAX_BODY: int = int(
        os.getenv("PROXYLENS_HIGHLIGHT_MAX_BODY", "1000000")
    )

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("PROXYLENS_LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv("PROXYLENS_LOG_FORMAT", "json")  # "json" or "text"


settings = Settings()
