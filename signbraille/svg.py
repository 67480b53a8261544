"""
Millimetre layout of tactile dots and a minimal SVG serialisation.

No collision or overflow checking is done here. Physical output always needs
to be verified by whoever produces the sign.
"""

import hashlib
import json
from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone

import numpy as np

# Dot positions in a cell (col, row), dot 1 first
DOT_POSITIONS = [
    (0, 0), (0, 1), (0, 2),
    (1, 0), (1, 1), (1, 2)
]
DOT_OFFSETS = np.array(DOT_POSITIONS, dtype=float)

METADATA_TAG = "signbraille-metadata"


@dataclass(frozen=True)
class SvgLayout:
    cell_width_mm: float = 6.3
    cell_height_mm: float = 10.0
    dot_diameter_mm: float = 1.5
    interdot_x_mm: float = 2.5
    interdot_y_mm: float = 2.5
    intercell_x_mm: float = 3.0
    interline_y_mm: float = 4.0
    margin_left_mm: float = 4.0
    margin_top_mm: float = 4.0

    @classmethod
    def from_dict(cls, data) -> "SvgLayout":
        """Set attributes from a settings dict or defaults; values are not range checked."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("layout must be an object")
        values = {}
        for f in fields(cls):
            raw = data.get(f.name, f.default)
            try:
                values[f.name] = float(raw)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid value for {f.name}: {raw!r} (expected a number in mm)")
        return cls(**values)

    def to_dict(self):
        return asdict(self)


DEFAULT_SVG_LAYOUT = SvgLayout()


@dataclass(frozen=True)
class VectorDocument:
    markup: str
    width_mm: float
    height_mm: float

    def to_dict(self):
        return {"svg": self.markup, "width_mm": self.width_mm, "height_mm": self.height_mm}


def _mm(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def canvas_size(lines, layout: SvgLayout = DEFAULT_SVG_LAYOUT):
    """Return (width_mm, height_mm) for the given lines of cells."""
    max_cells = max((len(line) for line in lines), default=0)
    line_count = len(lines)
    width = (
        layout.margin_left_mm * 2
        + max_cells * layout.cell_width_mm
        + max(0, max_cells - 1) * layout.intercell_x_mm
    )
    height = (
        layout.margin_top_mm * 2
        + line_count * layout.cell_height_mm
        + max(0, line_count - 1) * layout.interline_y_mm
    )
    return width, height


def dot_centers(lines, layout: SvgLayout = DEFAULT_SVG_LAYOUT) -> np.ndarray:
    """Absolute (x, y) centre of every raised dot, in reading order, as an (N, 2) array."""
    spacing = np.array([layout.interdot_x_mm, layout.interdot_y_mm])
    centers = []
    for line_index, line in enumerate(lines):
        base_y = layout.margin_top_mm + line_index * (layout.cell_height_mm + layout.interline_y_mm)
        for cell_index, cell in enumerate(line):
            mask = np.array(cell.pattern, dtype=bool)
            if not mask.any():
                continue
            base_x = layout.margin_left_mm + cell_index * (layout.cell_width_mm + layout.intercell_x_mm)
            centers.append(np.array([base_x, base_y]) + DOT_OFFSETS[mask] * spacing)
    if not centers:
        return np.zeros((0, 2))
    return np.vstack(centers)


def render_braille_svg(lines, layout: SvgLayout = DEFAULT_SVG_LAYOUT) -> VectorDocument:
    """Lay out ``lines`` of BrailleCells as filled circles on a white background."""
    width, height = canvas_size(lines, layout)
    radius = _mm(layout.dot_diameter_mm / 2)
    circles = [
        f'<circle cx="{_mm(x)}" cy="{_mm(y)}" r="{radius}" />'
        for x, y in dot_centers(lines, layout)
    ]
    markup = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_mm(width)}mm" height="{_mm(height)}mm" '
        f'viewBox="0 0 {_mm(width)} {_mm(height)}" role="img" aria-label="Braille preview">\n'
        '<rect width="100%" height="100%" fill="white" />\n'
        + "\n".join(circles)
        + "\n</svg>"
    )
    return VectorDocument(markup=markup, width_mm=width, height_mm=height)


def input_fingerprint(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def build_export_metadata(text, profile_id, report, acknowledged=False, generated_at=None):
    """Metadata block describing how an exported preview was produced."""
    generated_at = generated_at or datetime.now(timezone.utc)
    return {
        "generated_at": generated_at.isoformat(),
        "input_sha256": input_fingerprint(text),
        "profile_id": profile_id,
        "compliance_level": report.level,
        "flag_codes": report.codes,
        "acknowledged": bool(acknowledged),
    }


def export_svg(document: VectorDocument, metadata=None) -> str:
    """Standalone SVG file contents, optionally carrying a JSON metadata comment."""
    markup = document.markup
    if metadata is not None:
        # "--" is not allowed inside an XML comment
        payload = json.dumps(metadata, sort_keys=True).replace("--", "-\\u002d")
        open_tag, _, rest = markup.partition("\n")
        markup = f"{open_tag}\n<!-- {METADATA_TAG} {payload} -->\n{rest}"
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{markup}'


def read_export_metadata(svg_text: str):
    """Recover the metadata dict embedded by export_svg, or None."""
    marker = f"<!-- {METADATA_TAG} "
    start = svg_text.find(marker)
    if start < 0:
        return None
    end = svg_text.find(" -->", start)
    return json.loads(svg_text[start + len(marker):end])
