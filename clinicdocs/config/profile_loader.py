"""Layout profile: clinic branding and formatting used by the renderers."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..exceptions import ProfileError

logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "CLINICDOCS_PROFILE"


@dataclass
class LayoutProfile:
    """Branding and formatting settings for rendered documents.

    Attributes:
        clinic_name: Brand name drawn at the top of every document
        tagline: Line drawn under the brand name
        footer_message: Footer drawn on the last invoice page
        currency_symbol: Prefix for monetary amounts
        date_format: strftime format for header dates
        default_country: Country omitted from address blocks
        paid_status: Invoice status that triggers the PAID badge
    """

    clinic_name: str = "AHA Clinic"
    tagline: str = "Veterinary Services"
    footer_message: str = "Thank you for choosing AHA Clinic for your pet care needs!"
    currency_symbol: str = "$"
    date_format: str = "%m/%d/%Y"
    default_country: str = "USA"
    paid_status: str = "paid"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LayoutProfile':
        """Create LayoutProfile from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown layout profile keys: %s", ", ".join(unknown))
        values = {}
        for key in known:
            if key in data and data[key] is not None:
                values[key] = str(data[key])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def format_money(self, amount) -> str:
        """Format a cent-rounded amount, e.g. ``$140.00``."""
        return f"{self.currency_symbol}{amount:.2f}"

    def format_date(self, value) -> str:
        """Format a date for header lines; ``N/A`` when missing."""
        if value is None:
            return "N/A"
        return value.strftime(self.date_format)


def load_profile(path: Optional[Union[str, Path]] = None) -> LayoutProfile:
    """Load a layout profile from YAML.

    Args:
        path: Profile file. When omitted, the CLINICDOCS_PROFILE environment
              variable is consulted.

    Returns:
        LayoutProfile; built-in defaults when no profile file is configured
        or the configured file does not exist.

    Raises:
        ProfileError: If the file is not valid YAML or not a mapping
    """
    if path is None:
        path = os.getenv(PROFILE_ENV_VAR)
    if not path:
        return LayoutProfile()

    profile_path = Path(path)
    if not profile_path.exists():
        logger.warning("Layout profile not found at %s, using defaults", profile_path)
        return LayoutProfile()

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProfileError(f"Invalid YAML in layout profile {profile_path}: {e}") from e

    if data is None:
        return LayoutProfile()
    if not isinstance(data, dict):
        raise ProfileError(
            f"Layout profile {profile_path} must be a mapping, got {type(data).__name__}"
        )
    return LayoutProfile.from_dict(data)
