"""Render configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from .engine.geometry import DEFAULT_MARGINS, PAGE_SIZES, Margins, PageGeometry
from .exceptions import ConfigError
from .renderers.render_utils import ensure_margins, ensure_page_size


def _default_margins() -> Margins:
    return Margins(
        top=DEFAULT_MARGINS.top,
        bottom=DEFAULT_MARGINS.bottom,
        left=DEFAULT_MARGINS.left,
        right=DEFAULT_MARGINS.right,
    )


def _optional_path(value: Any) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(value)


@dataclass(slots=True)
class ReportConfig:
    """Everything a render needs besides the Markdown itself.

    Paths are not checked here: a missing logo or font surfaces as
    ``MediaError`` / ``FontError`` when the render starts.
    """

    page_size: str = "A4"
    margins: Margins = field(default_factory=_default_margins)
    logo_path: Optional[Path] = None
    body_font_path: Optional[Path] = None
    heading_font_path: Optional[Path] = None
    highlight_code: bool = True
    footer_enabled: bool = True
    base_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.page_size, str) or self.page_size.upper() not in PAGE_SIZES:
            raise ConfigError(
                f"Unsupported page size preset: {self.page_size}",
                f"expected one of {', '.join(sorted(PAGE_SIZES))}",
            )
        self.page_size = self.page_size.upper()

        size = PAGE_SIZES[self.page_size]
        m = self.margins
        if min(m.top, m.bottom, m.left, m.right) < 0:
            raise ConfigError("Margins must not be negative")
        if m.left + m.right >= size.width or m.top + m.bottom >= size.height:
            raise ConfigError("Margins leave no room for content")

    @property
    def geometry(self) -> PageGeometry:
        return PageGeometry(ensure_page_size(self.page_size), self.margins)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ReportConfig":
        """Build a config from CLI-style options; unknown keys are ignored.

        Raises:
            ConfigError: If a value is invalid.
        """
        try:
            margins = options.get("margins")
            return cls(
                page_size=options.get("page_size") or "A4",
                margins=ensure_margins(margins) if margins is not None else _default_margins(),
                logo_path=_optional_path(options.get("logo")),
                body_font_path=_optional_path(options.get("body_font")),
                heading_font_path=_optional_path(options.get("heading_font")),
                highlight_code=not options.get("no_highlight", False),
                footer_enabled=not options.get("no_footer", False),
                base_dir=_optional_path(options.get("base_dir")),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError("Invalid configuration", str(exc)) from exc
