"""
Module: reports.config

Purpose:
    Configuration for the PDF reports: school identity printed in the
    header, tabulation page size and the footer toggle.

Key Classes:
    - ReportConfig: Immutable report configuration

Key Functions:
    - load_report_config(): Read a JSON settings file with fallback

Dependencies:
    - dataclasses (std)
    - json (std)

Used By:
    - reports.renderer: Layout constants
    - controller, cli
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_SCHOOL_NAME = "GUZIA HIGH SCHOOL"
DEFAULT_ADDRESS = "Guzia, Shibganj, Bogura"
DEFAULT_ROWS_PER_PAGE = 13


@dataclass(frozen=True)
class ReportConfig:
    """
    Configuration for report rendering (immutable).

    Attributes:
        school_name: Header line 1
        address: Header line 2
        rows_per_page: Students per tabulation page
        show_footer: Print the generated-by footer on every page
        logo_path: Optional image drawn beside the school name

    Example:
        >>> config = ReportConfig(rows_per_page=10)
        >>> config.rows_per_page
        10
    """

    school_name: str = DEFAULT_SCHOOL_NAME
    address: str = DEFAULT_ADDRESS
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    show_footer: bool = True
    logo_path: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.school_name.strip():
            raise ValueError("school_name cannot be empty")
        if self.rows_per_page <= 0:
            raise ValueError(f"rows_per_page must be positive: {self.rows_per_page}")
        if self.logo_path is not None and not isinstance(self.logo_path, Path):
            object.__setattr__(self, "logo_path", Path(self.logo_path))


def load_report_config(path: Optional[Path]) -> ReportConfig:
    """
    Load ReportConfig from a JSON file.

    Unknown keys are ignored. A missing, unreadable or invalid file
    yields the defaults; the problem is logged, never raised.

    Args:
        path: JSON settings file, or None for defaults

    Returns:
        ReportConfig
    """
    if path is None:
        return ReportConfig()

    path = Path(path)
    if not path.exists():
        logger.debug(f"No report config at {path}, using defaults")
        return ReportConfig()

    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read report config {path}: {e}; using defaults")
        return ReportConfig()

    if not isinstance(data, dict):
        logger.warning(f"Report config {path} is not a JSON object; using defaults")
        return ReportConfig()

    known = {f.name for f in fields(ReportConfig)}
    ignored = sorted(set(data) - known)
    if ignored:
        logger.debug(f"Ignoring unknown report config keys: {ignored}")

    try:
        return ReportConfig(**{k: v for k, v in data.items() if k in known})
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Invalid report config {path}: {e}; using defaults")
        return ReportConfig()
