"""
Layout rendering

Turns a PlateLayout into an ordered list of draw commands (rectangles, lines
and text) for a 2D canvas, one stacked row per stock plate. Commands are in
content space (millimetres); a Transform maps them to pixels as
pixel = offset + content * scale, i.e. the pan offset is applied before
scaling.

Anything meant to look the same at every zoom level (margins, fonts, stroke
widths, leader lines) is given in pixels and divided by the scale.

ViewController owns the ViewState (zoom, pan, tooltip) and is the only thing
that mutates it, through its input handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Tuple, Union

from shapely.geometry import Point, Polygon, box as shp_box

from .config import settings as default_settings, Settings
from .layout import round_half_up
from .models import PlateLayout

# ============================================================================
# STYLE (pixels unless noted)
# ============================================================================
MARGIN_LEFT_PX = 160.0
MARGIN_TOP_PX = 50.0
FONT_PX = 12.0
OUTLINE_PX = 2.0
CUT_LINE_PX = 1.0
HATCH_LINE_PX = 1.0
LEADER_PX = 15.0
TOOLTIP_W_PX = 100.0
TOOLTIP_H_PX = 30.0
TOOLTIP_TEXT = "Offcut Area"
TOOLTIP_CURSOR_DX = 10.0
TOOLTIP_CURSOR_DY = -20.0

OUTLINE_COLOR = "black"
USED_FILL = "gray"
CUT_LINE_COLOR = "white"
OFFCUT_COLOR = "rgb(255, 5, 5)"
LABEL_COLOR = "black"
TOOLTIP_FILL = "rgb(255, 0, 0)"
TOOLTIP_TEXT_COLOR = "white"


# ============================================================================
# DRAW COMMANDS
# ============================================================================
@dataclass(frozen=True)
class RectCommand:
    """Axis-aligned rectangle; hatch="mesh" draws a cross-hatch instead of a fill"""
    x: float
    y: float
    w: float
    h: float
    stroke: Optional[str] = None
    fill: Optional[str] = None
    line_width: float = 1.0
    hatch: Optional[str] = None
    role: str = ""
    kind: str = field(default="rect", init=False)


@dataclass(frozen=True)
class LineCommand:
    x0: float
    y0: float
    x1: float
    y1: float
    color: str = LABEL_COLOR
    line_width: float = 1.0
    role: str = ""
    kind: str = field(default="line", init=False)


@dataclass(frozen=True)
class TextCommand:
    x: float
    y: float
    text: str
    font_size: float
    color: str = LABEL_COLOR
    bold: bool = True
    anchor: str = "start"
    role: str = ""
    kind: str = field(default="text", init=False)


DrawCommand = Union[RectCommand, LineCommand, TextCommand]


def command_to_dict(cmd: DrawCommand) -> dict:
    return asdict(cmd)


@dataclass(frozen=True)
class Transform:
    offset_x: float
    offset_y: float
    scale: float

    def to_pixels(self, x: float, y: float) -> Tuple[float, float]:
        return self.offset_x + x * self.scale, self.offset_y + y * self.scale

    def to_content(self, px: float, py: float) -> Tuple[float, float]:
        return (px - self.offset_x) / self.scale, (py - self.offset_y) / self.scale


@dataclass(frozen=True)
class Scene:
    """A complete redraw: clear the canvas, apply transform, draw commands in order"""
    transform: Transform
    width: int
    height: int
    commands: Tuple[DrawCommand, ...]

    def by_role(self, role: str) -> List[DrawCommand]:
        return [c for c in self.commands if c.role == role]


# ============================================================================
# VIEW STATE
# ============================================================================
@dataclass
class Tooltip:
    visible: bool = False
    text: str = ""
    x: float = 0.0
    y: float = 0.0


@dataclass
class ViewState:
    """Zoom, pan and hover state of one canvas"""
    scale: float = field(default_factory=lambda: default_settings.INITIAL_SCALE)
    offset_x: float = 0.0
    offset_y: float = 0.0
    dragging: bool = False
    anchor_x: float = 0.0
    anchor_y: float = 0.0
    tooltip: Tooltip = field(default_factory=Tooltip)

    @property
    def transform(self) -> Transform:
        return Transform(self.offset_x, self.offset_y, self.scale)


# ============================================================================
# LAYOUT GEOMETRY
# ============================================================================
def plate_top(layout: PlateLayout, index: int, scale: float, vertical_gap: float) -> float:
    """Content-space y of the top edge of plate `index`"""
    return MARGIN_TOP_PX / scale + index * (layout.plate_width + vertical_gap)


def plate_left(scale: float) -> float:
    return MARGIN_LEFT_PX / scale


def _plate_commands(layout: PlateLayout, plate_index: int, scale: float,
                    vertical_gap: float) -> List[DrawCommand]:
    plate = layout.plates[plate_index]
    W, L, dl = layout.plate_width, layout.plate_length, layout.developed_length
    x0 = plate_left(scale)
    y0 = plate_top(layout, plate_index, scale, vertical_gap)
    px = 1.0 / scale
    font = FONT_PX * px
    leader = LEADER_PX * px

    cmds: List[DrawCommand] = [
        RectCommand(x0, y0, L, W, stroke=OUTLINE_COLOR, line_width=OUTLINE_PX * px, role="outline"),
        RectCommand(x0, y0, plate.used_length, W, fill=USED_FILL, role="used"),
    ]

    for k in range(1, plate.units):
        x = x0 + k * dl
        cmds.append(LineCommand(x, y0, x, y0 + W, color=CUT_LINE_COLOR,
                                line_width=CUT_LINE_PX * px, role="cut"))

    has_offcut = plate.offcut_length > 0
    if has_offcut:
        cmds.append(RectCommand(
            x0 + plate.used_length, y0, plate.offcut_length, W,
            stroke=OFFCUT_COLOR, line_width=HATCH_LINE_PX * px, hatch="mesh", role="offcut",
        ))

    # Width, to the left of the plate
    y_mid = y0 + W / 2
    cmds.append(LineCommand(x0, y_mid, x0 - 2 * leader, y_mid, line_width=px, role="leader"))
    cmds.append(TextCommand(x0 - 2 * leader - 5 * px, y_mid + 4 * px, f"Width: {round_half_up(W)} mm",
                            font, anchor="end", role="label"))

    # Length, above the plate
    x_mid = x0 + L / 2
    cmds.append(LineCommand(x_mid, y0 - 5 * px, x_mid, y0 - 5 * px - leader, line_width=px, role="leader"))
    cmds.append(TextCommand(x_mid, y0 - 10 * px - leader, f"Length: {round_half_up(L)} mm",
                            font, anchor="middle", role="label"))

    # Developed length, inside the first course
    x_dl = x0 + dl / 2
    cmds.append(LineCommand(x_dl, y0 + 20 * px, x_dl, y0 + 20 * px + leader, line_width=px, role="leader"))
    cmds.append(TextCommand(x_dl, y0 + 25 * px + leader + font, f"Developed Length: {round_half_up(dl)} mm",
                            font, anchor="middle", role="label"))

    if has_offcut:
        x_off = x0 + plate.used_length + plate.offcut_length / 2
        cmds.append(LineCommand(x_off, y_mid, x_off + leader, y_mid - leader,
                                color=OFFCUT_COLOR, line_width=px, role="leader"))
        cmds.append(TextCommand(x_off + leader + 5 * px, y_mid - leader,
                                f"Offcut: {round_half_up(plate.offcut_length)} mm",
                                font, color=OFFCUT_COLOR, role="offcut-label"))
    return cmds


def _tooltip_commands(tooltip: Tooltip, transform: Transform) -> List[DrawCommand]:
    px = 1.0 / transform.scale
    x, y = transform.to_content(tooltip.x, tooltip.y)
    return [
        RectCommand(x, y, TOOLTIP_W_PX * px, TOOLTIP_H_PX * px, fill=TOOLTIP_FILL, role="tooltip"),
        TextCommand(x + 5 * px, y + 20 * px, tooltip.text, FONT_PX * px,
                    color=TOOLTIP_TEXT_COLOR, role="tooltip"),
    ]


def render_layout(layout: Optional[PlateLayout], view: ViewState,
                  config: Settings = default_settings) -> Scene:
    """
    Build the full scene for a layout.

    Plates are stacked top to bottom, plate i offset by
    i * (plate_width + VERTICAL_GAP_MM). The tooltip, when visible, is drawn
    last so it sits on top.
    """
    cmds: List[DrawCommand] = []
    if layout is not None:
        for i in range(len(layout.plates)):
            cmds.extend(_plate_commands(layout, i, view.scale, config.VERTICAL_GAP_MM))
        if view.tooltip.visible:
            cmds.extend(_tooltip_commands(view.tooltip, view.transform))
    return Scene(
        transform=view.transform,
        width=config.CANVAS_WIDTH,
        height=config.CANVAS_HEIGHT,
        commands=tuple(cmds),
    )


def offcut_hit_regions(layout: PlateLayout, view: ViewState,
                       config: Settings = default_settings) -> List[Polygon]:
    """
    Pixel-space hover regions, one per plate with an offcut.

    Each region starts where the offcut starts and is a fixed
    OFFCUT_HIT_WIDTH_PX wide regardless of how long the offcut is.
    """
    t = view.transform
    regions = []
    for plate in layout.plates:
        if plate.offcut_length <= 0:
            continue
        x0, y0 = t.to_pixels(
            plate_left(t.scale) + plate.used_length,
            plate_top(layout, plate.index, t.scale, config.VERTICAL_GAP_MM),
        )
        y1 = y0 + layout.plate_width * t.scale
        regions.append(shp_box(x0, y0, x0 + config.OFFCUT_HIT_WIDTH_PX, y1))
    return regions


# ============================================================================
# INTERACTION
# ============================================================================
class ViewController:
    """
    Owns the ViewState of one canvas.

    Every handler returns True when the scene has to be redrawn (layout,
    scale, tooltip or pan offset changed).
    """

    def __init__(self, layout: Optional[PlateLayout] = None,
                 state: Optional[ViewState] = None,
                 config: Settings = default_settings):
        self.config = config
        self.layout = layout
        self.state = state if state is not None else ViewState(scale=config.INITIAL_SCALE)

    def set_layout(self, layout: Optional[PlateLayout]) -> bool:
        if layout == self.layout:
            return False
        self.layout = layout
        self.state.tooltip = Tooltip()
        return True

    def mouse_down(self, x: float, y: float) -> bool:
        # Anchor relative to the current offset so a new drag continues from it
        self.state.anchor_x = x - self.state.offset_x
        self.state.anchor_y = y - self.state.offset_y
        self.state.dragging = True
        return False

    def mouse_move(self, x: float, y: float) -> bool:
        changed = self._update_tooltip(x, y)
        if self.state.dragging:
            offset = (x - self.state.anchor_x, y - self.state.anchor_y)
            if offset != (self.state.offset_x, self.state.offset_y):
                self.state.offset_x, self.state.offset_y = offset
                changed = True
        return changed

    def mouse_up(self) -> bool:
        self.state.dragging = False
        return False

    def pan_by(self, dx: float, dy: float) -> bool:
        """Shift the view by a pixel delta without a pointer (e.g. pan buttons)"""
        if dx == 0 and dy == 0:
            return False
        self.state.offset_x += dx
        self.state.offset_y += dy
        # The tooltip follows a cursor; there is none here
        self.state.tooltip = Tooltip()
        return True

    def zoom_in(self) -> bool:
        return self._set_scale(self.state.scale + self.config.ZOOM_STEP)

    def zoom_out(self) -> bool:
        return self._set_scale(self.state.scale - self.config.ZOOM_STEP)

    def scene(self) -> Scene:
        return render_layout(self.layout, self.state, self.config)

    def _set_scale(self, scale: float) -> bool:
        # Rounded so repeated steps land exactly on 0.01, 0.02, ...
        scale = round(min(max(scale, self.config.MIN_SCALE), self.config.MAX_SCALE), 6)
        if scale == self.state.scale:
            return False
        self.state.scale = scale
        return True

    def _update_tooltip(self, x: float, y: float) -> bool:
        hit = False
        if self.layout is not None:
            cursor = Point(x, y)
            hit = any(r.covers(cursor) for r in offcut_hit_regions(self.layout, self.state, self.config))
        if hit:
            tooltip = Tooltip(True, TOOLTIP_TEXT, x + TOOLTIP_CURSOR_DX, y + TOOLTIP_CURSOR_DY)
        else:
            tooltip = Tooltip()
        if tooltip == self.state.tooltip:
            return False
        self.state.tooltip = tooltip
        return True
