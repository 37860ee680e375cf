# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Render tool definitions into Mintlify documentation pages."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from .lookups import DEFAULT_LOOKUPS, RenderLookups
from .models import ConfigField, ToolDefinition

DEFAULT_EXTENSION: Final[str] = ".mdx"
DEFAULT_LINK_PREFIX: Final[str] = "/tools"
NO_PARAMETERS: Final[str] = "No configuration parameters required."
SUMMARY_TITLE: Final[str] = "Tools Overview"

_SETUP_STEPS: Final[tuple[tuple[str, str], ...]] = (
    ("Navigate to Tools", "Go to the **Tools** section in your project dashboard"),
    ("Create {title} Tool", "Click **Create Tool** and select **{title}**"),
    ("Configure Parameters", "Fill in the required configuration parameters above"),
    ("Test Configuration", "Use the test button to verify your setup works correctly"),
    ("Add to Agent", "Assign this tool to your agents in agent settings"),
)


def document_stem(identifier: str) -> str:
    """Return the filename stem for ``identifier`` (lowercase, hyphenated)."""

    return identifier.lower().replace("_", "-")


def document_filename(identifier: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Return the output filename for the tool named ``identifier``.

    Args:
        identifier: Catalog identifier such as ``REMOTE_MCP_SERVER``.
        extension: Document extension including the leading dot.

    Returns:
        str: Filename such as ``remote-mcp-server.mdx``.
    """

    return f"{document_stem(identifier)}{extension}"


def render_parameters(fields: Sequence[ConfigField]) -> str:
    """Return the parameter documentation block for ``fields`` in declaration order.

    Args:
        fields: Configuration fields of a single tool.

    Returns:
        str: One ``ParamField`` block per field, or a fixed sentence when the
        tool takes no configuration.
    """

    if not fields:
        return NO_PARAMETERS
    return "\n\n".join(_render_field(config_field) for config_field in fields)


def _render_field(config_field: ConfigField) -> str:
    required = " required" if config_field.required else ""
    lines = [
        f'<ParamField path="{_attribute(config_field.key)}" type="{_attribute(config_field.input_type)}"{required}>',
        f"  {config_field.label}",
    ]
    if config_field.placeholder:
        lines.append(f"  <br />**Example**: {_inline_code(config_field.placeholder)}")
    if config_field.help_text:
        lines.append(f"  <br />**Help**: {config_field.help_text}")
    if config_field.condition is not None:
        condition = config_field.condition
        lines.append(f'  <br />**Condition**: Only shown when {condition.field} = "{condition.value}"')
    if config_field.choices:
        lines.append("  <br />**Options**:")
        lines.extend(f"  - {_inline_code(choice.value)} - {choice.label}" for choice in config_field.choices)
    lines.append("</ParamField>")
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class ToolPageRenderer:
    """Pure renderer mapping tool definitions through injected lookup tables."""

    lookups: RenderLookups = DEFAULT_LOOKUPS
    link_prefix: str = DEFAULT_LINK_PREFIX

    def render(self, tool: ToolDefinition) -> str:
        """Return the complete documentation page for ``tool``.

        Unknown identifiers fall back to generic prose, so this never fails
        for a well-formed tool. The output carries no timestamps and ends with
        a single newline.

        Args:
            tool: Normalised tool definition.

        Returns:
            str: Self-contained ``.mdx`` document.
        """

        lookups = self.lookups
        blocks = [
            self._front_matter(tool),
            f"# {tool.title}",
            lookups.description_for(tool.identifier),
        ]
        badge = lookups.badge_for(tool.status)
        if badge:
            blocks.append(badge)
        blocks.extend(
            [
                "## Overview",
                lookups.overview_for(tool.identifier),
                "## Configuration Parameters",
                render_parameters(tool.fields),
                "## Setup Instructions",
                _render_steps(tool.title),
                "## Usage Examples",
                lookups.examples_for(tool.identifier),
                "## Best Practices",
                lookups.best_practices_for(tool.identifier),
                "## Next Steps",
                self._next_steps(),
            ],
        )
        return "\n\n".join(blocks) + "\n"

    def render_summary(self, tools: Sequence[ToolDefinition]) -> str:
        """Return the overview page enumerating ``tools`` in catalog order.

        Args:
            tools: Every tool documented by the current run.

        Returns:
            str: Overview ``.mdx`` document with a table and a card per tool.
        """

        lookups = self.lookups
        front_matter = "\n".join(
            [
                "---",
                f"title: {_quoted(SUMMARY_TITLE)}",
                f"description: {_quoted(f'All tools available to your {lookups.product_name} agents')}",
                f"icon: {_quoted('grid')}",
                "---",
            ],
        )
        blocks = [front_matter, f"# {SUMMARY_TITLE}"]
        if not tools:
            blocks.append("No tools are currently available.")
            return "\n\n".join(blocks) + "\n"

        noun = "tool is" if len(tools) == 1 else "tools are"
        blocks.append(
            f"{len(tools)} {noun} available. Each page documents the tool's configuration parameters.",
        )
        rows = ["| Tool | Identifier | Status |", "| --- | --- | --- |"]
        for tool in tools:
            status = tool.status.value.title() if tool.status is not None else ""
            rows.append(
                f"| [{_cell(tool.title)}]({self._href(tool)}) | `{_cell(tool.identifier)}` | {status} |",
            )
        blocks.append("\n".join(rows))

        cards = ["<CardGroup cols={2}>"]
        for tool in tools:
            cards.extend(
                [
                    f'  <Card title="{_attribute(tool.title)}" icon="{lookups.icon_for(tool.icon)}" '
                    f'href="{self._href(tool)}">',
                    f"    {lookups.description_for(tool.identifier)}",
                    "  </Card>",
                ],
            )
        cards.append("</CardGroup>")
        blocks.append("\n".join(cards))
        return "\n\n".join(blocks) + "\n"

    def _href(self, tool: ToolDefinition) -> str:
        return f"{self.link_prefix.rstrip('/')}/{document_stem(tool.identifier)}"

    def _front_matter(self, tool: ToolDefinition) -> str:
        lines = [
            "---",
            f"title: {_quoted(tool.title)}",
            f"description: {_quoted(f'Configure {tool.title} for your {self.lookups.product_name} agents')}",
            f"icon: {_quoted(self.lookups.icon_for(tool.icon))}",
        ]
        if tool.status is not None:
            lines.append(f"status: {_quoted(tool.status.value)}")
        lines.append("---")
        return "\n".join(lines)

    def _next_steps(self) -> str:
        prefix = self.link_prefix.rstrip("/")
        cards = (
            ("Browse Other Tools", "grid", f"{prefix}/overview", "Explore other available tools"),
            (
                "Advanced Configuration",
                "settings",
                "/guides/multi-tool-setup",
                "Learn advanced tool configuration patterns",
            ),
            ("API Reference", "code", "/api-reference/tools", "View the tools API documentation"),
            ("Get Help", "life-ring", self.lookups.support_href, "Contact support for assistance"),
        )
        lines = ["<CardGroup cols={2}>"]
        for title, icon, href, body in cards:
            lines.extend(
                [
                    f'  <Card title="{title}" icon="{icon}" href="{href}">',
                    f"    {body}",
                    "  </Card>",
                ],
            )
        lines.append("</CardGroup>")
        return "\n".join(lines)


def _render_steps(title: str) -> str:
    lines = ["<Steps>"]
    for step_title, body in _SETUP_STEPS:
        lines.extend(
            [
                f'  <Step title="{_attribute(step_title.format(title=title))}">',
                f"    {body.format(title=title)}",
                "  </Step>",
            ],
        )
    lines.append("</Steps>")
    return "\n".join(lines)


def _quoted(value: str) -> str:
    """Return ``value`` as a double-quoted YAML scalar."""

    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


def _inline_code(value: str) -> str:
    if "`" in value:
        return f"`` {value} ``"
    return f"`{value}`"


def _cell(value: str) -> str:
    return value.replace("|", "\\|")


__all__ = [
    "DEFAULT_EXTENSION",
    "DEFAULT_LINK_PREFIX",
    "NO_PARAMETERS",
    "ToolPageRenderer",
    "document_filename",
    "document_stem",
    "render_parameters",
]
