"""
Vendor profiles.

Every vendor speaks the same OpenAI-compatible protocol, so a single
ProviderAdapter serves all of them. What differs per vendor (extra headers,
payload tweaks) lives in a VendorProfile handed to the adapter.
"""

from types import MappingProxyType
from typing import Any, Mapping

from culturesense_llm.config import Settings
from culturesense_llm.models.enums import ProviderName


class VendorProfile:
    """
    Default profile: plain OpenAI-compatible vendor, no quirks.

    Subclasses override ``headers`` and/or ``shape_payload``.
    """

    def headers(self) -> dict[str, str]:
        """Vendor-specific headers added to every request."""
        return {}

    def shape_payload(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Adjust the request body before it is sent."""
        return payload

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class OpenRouterProfile(VendorProfile):
    """OpenRouter attributes traffic to the calling app via ``X-Title``."""

    def __init__(self, app_title: str):
        self.app_title = app_title

    def headers(self) -> dict[str, str]:
        if not self.app_title:
            return {}
        return {"X-Title": self.app_title}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(app_title={self.app_title!r})"


def build_vendor_profiles(settings: Settings) -> Mapping[ProviderName, VendorProfile]:
    """Read-only mapping of provider name to its profile."""
    return MappingProxyType({
        ProviderName.OPENROUTER: OpenRouterProfile(settings.OPENROUTER_APP_TITLE),
        ProviderName.TOGETHER: VendorProfile(),
    })
