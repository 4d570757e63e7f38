from dataclasses import dataclass, field
from typing import List, Optional

from spendwise.contracts.document import (
    BulletRow,
    KeyValueRow,
    ParsedDocument,
    Row,
    Section,
)

UNNAMED_ANALYSIS = "Unnamed Analysis"
VENDOR_KEY = "Vendor:"


@dataclass(frozen=True)
class Panel:
    title: str
    rows: List[Row] = field(default_factory=list)
    translated: bool = False


@dataclass(frozen=True)
class RenderModel:
    """
    Display-ready view: primary panels first, then translated panels.
    """

    panels: List[Panel] = field(default_factory=list)
    translation_label: Optional[str] = None


def build_render_model(document: ParsedDocument) -> RenderModel:
    panels = [Panel(title=section.title, rows=list(section.rows)) for section in document.primary]

    label = None
    if document.translation is not None:
        label = document.translation.language_label
        panels.extend(
            Panel(title=section.title, rows=list(section.rows), translated=True)
            for section in document.translation.sections
        )

    return RenderModel(panels=panels, translation_label=label)


def _render_row(row: Row, key_width: int) -> str:
    if isinstance(row, BulletRow):
        return f"  • {row.text}"
    if isinstance(row, KeyValueRow):
        return f"  {row.key.upper():<{key_width}}  {row.value}"
    return f"  {row.text}"


def _render_section(section: Section) -> List[str]:
    key_width = max(
        (len(row.key.upper()) for row in section.rows if isinstance(row, KeyValueRow)),
        default=0,
    )
    return [section.title, *(_render_row(row, key_width) for row in section.rows)]


def render_text(model: RenderModel) -> str:
    """Plain-text rendering for the terminal."""
    lines: List[str] = []
    translation_started = False

    for panel in model.panels:
        if panel.translated and not translation_started:
            translation_started = True
            lines.append(f"🌐 {(model.translation_label or '').upper()}")
            lines.append("")

        lines.extend(_render_section(Section(title=panel.title, rows=panel.rows)))
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def vendor_name(formatted_output: str) -> str:
    """
    Label used for history listings: the first ``Vendor:`` line of the output.
    """
    for line in formatted_output.split("\n"):
        if VENDOR_KEY in line:
            return line.replace(VENDOR_KEY, "").strip() or UNNAMED_ANALYSIS
    return UNNAMED_ANALYSIS
