# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Static prose and icon tables consumed by the page renderer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from .models import ToolStatus

DEFAULT_PRODUCT_NAME: Final[str] = "PLai Framework"
DEFAULT_SUPPORT_HREF: Final[str] = "mailto:support@plaisolutions.com"
FALLBACK_ICON: Final[str] = "wrench"
FALLBACK_DESCRIPTION: Final[str] = "A powerful tool for enhancing your agent capabilities."
FALLBACK_OVERVIEW: Final[str] = "This tool enhances your agents with additional capabilities."
FALLBACK_EXAMPLES: Final[str] = "For detailed usage examples, see the complete documentation above."
FALLBACK_BEST_PRACTICES: Final[str] = (
    "Follow the configuration guidelines and test thoroughly before production deployment."
)

_ICONS: Final[dict[str, str]] = {
    "CloudCog": "cloud",
    "Perplexity": "magnifying-glass",
    "MCPServer": "server",
    "Database": "database",
    "Globe": "globe",
    "Code": "code",
}

_DESCRIPTIONS: Final[dict[str, str]] = {
    "HTTP": "Make HTTP requests to external APIs with full control over headers, methods, and request bodies.",
    "PERPLEXITY": (
        "Enhance your agents with web search capabilities using Perplexity AI's powerful search models."
    ),
    "REMOTE_MCP_SERVER": (
        "Connect to Model Context Protocol servers to extend agent capabilities with external services."
    ),
    "BROWSER": "Enable web scraping and browser automation for data extraction and web interactions.",
    "CODE_EXECUTOR": "Execute code in a secure environment for data processing and computational tasks.",
    "EXTERNAL_DATASOURCE": "Connect to external databases and data sources for enhanced data access.",
}

_OVERVIEWS: Final[dict[str, str]] = {
    "HTTP": (
        "The API Request tool allows your agents to interact with any REST API endpoint. It provides "
        "complete control over HTTP methods, headers, request bodies, and response handling."
    ),
    "PERPLEXITY": (
        "The Perplexity AI tool provides your agents with powerful web search and research capabilities. "
        "It leverages Perplexity's advanced AI models to search the web, analyze information, and provide "
        "comprehensive, citation-backed responses."
    ),
    "REMOTE_MCP_SERVER": (
        "The MCP Server tool enables agents to connect to remote Model Context Protocol (MCP) servers, "
        "extending their capabilities with external services, tools, and data sources through a "
        "standardized protocol."
    ),
    "BROWSER": (
        "The Browser tool enables your agents to extract data from websites, perform web scraping, and "
        "interact with web pages. It supports multiple scraping engines including ScraperAPI for reliable, "
        "large-scale web scraping."
    ),
    "CODE_EXECUTOR": (
        "The Code Interpreter tool enables your agents to execute code in a secure, sandboxed environment. "
        "This powerful capability allows agents to perform complex calculations, data analysis, file "
        "processing, and algorithmic tasks."
    ),
    "EXTERNAL_DATASOURCE": (
        "The External Data Source tool enables your agents to connect to external databases, APIs, and "
        "data repositories, providing seamless access to structured and unstructured data from various "
        "sources."
    ),
}

_BADGES: Final[dict[ToolStatus, str]] = {
    ToolStatus.DEFAULT: (
        "<Note>\nThis tool has **Default** status, meaning it's production-ready and available on all "
        "subscription plans.\n</Note>"
    ),
    ToolStatus.PRO: (
        "<Note>\nThis tool has **Pro** status, meaning it requires a professional subscription and "
        "provides advanced features for premium users.\n</Note>"
    ),
    ToolStatus.ALPHA: (
        "<Warning>\nThis tool has **Alpha** status, meaning it's in early access with features that may "
        "change based on user feedback.\n</Warning>"
    ),
    ToolStatus.PREVIEW: (
        "<Note>\nThis tool has **Preview** status, meaning it's nearly ready for production with potential "
        "minor adjustments based on user feedback.\n</Note>"
    ),
}


def _frozen(mapping: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


def _frozen_badges(mapping: Mapping[ToolStatus, str] | None = None) -> Mapping[ToolStatus, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class RenderLookups:
    """Immutable prose tables keyed by tool identifier (icons by icon key)."""

    descriptions: Mapping[str, str] = field(default_factory=_frozen)
    overviews: Mapping[str, str] = field(default_factory=_frozen)
    icons: Mapping[str, str] = field(default_factory=_frozen)
    badges: Mapping[ToolStatus, str] = field(default_factory=_frozen_badges)
    examples: Mapping[str, str] = field(default_factory=_frozen)
    best_practices: Mapping[str, str] = field(default_factory=_frozen)
    fallback_icon: str = FALLBACK_ICON
    fallback_description: str = FALLBACK_DESCRIPTION
    fallback_overview: str = FALLBACK_OVERVIEW
    fallback_examples: str = FALLBACK_EXAMPLES
    fallback_best_practices: str = FALLBACK_BEST_PRACTICES
    product_name: str = DEFAULT_PRODUCT_NAME
    support_href: str = DEFAULT_SUPPORT_HREF

    def icon_for(self, icon_key: str) -> str:
        """Return the documentation icon name for the catalog ``icon_key``."""

        return self.icons.get(icon_key, self.fallback_icon)

    def description_for(self, identifier: str) -> str:
        """Return the one-line description for ``identifier``."""

        return self.descriptions.get(identifier, self.fallback_description)

    def overview_for(self, identifier: str) -> str:
        """Return the overview paragraph for ``identifier``."""

        return self.overviews.get(identifier, self.fallback_overview)

    def badge_for(self, status: ToolStatus | None) -> str:
        """Return the status callout, or an empty string when no status is set."""

        if status is None:
            return ""
        return self.badges.get(status, "")

    def examples_for(self, identifier: str) -> str:
        """Return the usage-examples section body for ``identifier``."""

        return self.examples.get(identifier, self.fallback_examples)

    def best_practices_for(self, identifier: str) -> str:
        """Return the best-practices section body for ``identifier``."""

        return self.best_practices.get(identifier, self.fallback_best_practices)


DEFAULT_LOOKUPS: Final[RenderLookups] = RenderLookups(
    descriptions=_frozen(_DESCRIPTIONS),
    overviews=_frozen(_OVERVIEWS),
    icons=_frozen(_ICONS),
    badges=_frozen_badges(_BADGES),
)


__all__ = [
    "DEFAULT_LOOKUPS",
    "FALLBACK_DESCRIPTION",
    "FALLBACK_ICON",
    "FALLBACK_OVERVIEW",
    "RenderLookups",
]
