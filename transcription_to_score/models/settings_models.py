"""Parameter models for layout, rendering and export.

These models hold every constant the engine uses so that nothing lives in
module-level state. Tests and callers build variants with different
spacing or sizes and pass them explicitly to ``plan``/``render``.
"""

from pydantic import BaseModel, Field, model_validator


class LayoutConstraints(BaseModel):
    """Geometry constants for the layout planner.

    Attributes:
        canvas_width: Surface width in pixels (default 1000).
        canvas_height: Surface height in pixels (default 600).
        staff_left: x of the left end of every staff.
        staff_right_margin: Space between the staff's right end and the canvas edge.
        staff_top: y of the top line of the first system.
        line_spacing: Distance between adjacent staff lines (default 12).
        system_spacing: Vertical distance between systems (default 140).
        measures_per_system: Measures placed on one system (default 4).
        min_note_slots: Minimum slot divisor inside a measure (default 4).
        leading_reserved_width: Clef space before the first measure (default 110).
        time_signature_width: Extra reserved space on the first system.
        measure_interior_margin: Inset of the first note from the measure's left edge.
    """

    canvas_width: int = Field(1000, ge=100, description="Surface width in px")
    canvas_height: int = Field(600, ge=100, description="Surface height in px")
    staff_left: float = Field(40.0, ge=0.0, description="Staff left x")
    staff_right_margin: float = Field(40.0, ge=0.0, description="Right margin")
    staff_top: float = Field(130.0, ge=0.0, description="First staff top y")
    line_spacing: float = Field(12.0, gt=0.0, description="Staff line spacing")
    system_spacing: float = Field(140.0, gt=0.0, description="System spacing")
    measures_per_system: int = Field(4, ge=1, description="Measures per system")
    min_note_slots: int = Field(4, ge=1, description="Minimum note slots")
    leading_reserved_width: float = Field(
        110.0, ge=0.0, description="Clef space before the first measure"
    )
    time_signature_width: float = Field(
        20.0, ge=0.0, description="Extra space for the time signature"
    )
    measure_interior_margin: float = Field(
        10.0, ge=0.0, description="Inset of notes inside a measure"
    )

    @property
    def staff_width(self) -> float:
        return self.canvas_width - self.staff_left - self.staff_right_margin

    @property
    def staff_right(self) -> float:
        return self.staff_left + self.staff_width

    @property
    def staff_height(self) -> float:
        return 4 * self.line_spacing

    def reserved_width(self, is_first: bool) -> float:
        """Leading space for a system, widened on the first one."""
        if is_first:
            return self.leading_reserved_width + self.time_signature_width
        return self.leading_reserved_width

    @model_validator(mode="after")
    def check_measure_room(self) -> "LayoutConstraints":
        """Reject geometry that leaves the first system's measures no interior."""
        usable = self.staff_width - self.reserved_width(is_first=True)
        if usable <= 0:
            raise ValueError(
                f"staff width {self.staff_width} leaves no room after the "
                f"reserved width {self.reserved_width(is_first=True)}"
            )
        width = usable / self.measures_per_system
        if width <= 2 * self.measure_interior_margin:
            raise ValueError(
                f"measure width {width} must exceed twice the interior margin "
                f"{self.measure_interior_margin}"
            )
        return self


class RenderStyle(BaseModel):
    """Glyph sizes, line weights and colors used by the rasterizer.

    Attributes:
        notehead_rx: Horizontal notehead radius.
        notehead_ry: Vertical notehead radius.
        notehead_rotation: Notehead tilt in radians.
        hollow_line_width: Outline width of whole and half noteheads.
        stem_length: Length of every stem (always drawn upward).
        stem_width: Stem line width.
        flag_height: Vertical extent of one flag hook.
        flag_bulge: How far a flag curves right of the stem.
        flag_spacing: Distance between stacked flags.
        ledger_half_width: Half the length of a ledger line.
        staff_line_width: Width of staff and single bar lines.
        final_bar_width: Width of the thick final bar line.
        final_bar_gap: Distance of the thin final line left of the thick one.
        clef_offset: Clef x relative to the staff's left end.
        clef_line_width: Stroke width of the clef.
        time_signature_offset: Time signature center x relative to the staff's left end.
        header_margin: Distance of header text from the canvas sides.
        title_baseline: Title baseline y.
        header_baseline: Baseline y of the tempo and time signature line.
        header_line_height: Distance to the key line below it.
        title_size: Title text height in px.
        text_size: Header text height in px.
        time_signature_size: Time signature digit height in px.
        background: RGB background color.
        ink: RGB drawing color.
    """

    notehead_rx: float = Field(5.0, gt=0.0)
    notehead_ry: float = Field(4.0, gt=0.0)
    notehead_rotation: float = Field(-0.3)
    hollow_line_width: float = Field(2.0, gt=0.0)
    stem_length: float = Field(32.0, gt=0.0)
    stem_width: float = Field(1.5, gt=0.0)
    flag_height: float = Field(12.0, gt=0.0)
    flag_bulge: float = Field(8.0, gt=0.0)
    flag_spacing: float = Field(5.0, gt=0.0)
    ledger_half_width: float = Field(8.0, gt=0.0)
    staff_line_width: float = Field(1.0, gt=0.0)
    final_bar_width: float = Field(3.0, gt=0.0)
    final_bar_gap: float = Field(4.0, ge=0.0)
    clef_offset: float = Field(5.0)
    clef_line_width: float = Field(2.0, gt=0.0)
    time_signature_offset: float = Field(85.0)
    header_margin: float = Field(30.0, ge=0.0)
    title_baseline: float = Field(35.0, ge=0.0)
    header_baseline: float = Field(70.0, ge=0.0)
    header_line_height: float = Field(20.0, gt=0.0)
    title_size: int = Field(24, ge=4)
    text_size: int = Field(16, ge=4)
    time_signature_size: int = Field(20, ge=4)
    background: tuple[int, int, int] = Field((255, 255, 255))
    ink: tuple[int, int, int] = Field((0, 0, 0))


class ExportParams(BaseModel):
    """Configuration for image export.

    Attributes:
        filename: Default download filename.
        fit_height: Grow the surface so every system fits instead of
            clipping systems that fall below the canvas.
    """

    filename: str = Field("piano-sheet-music.png", min_length=1)
    fit_height: bool = Field(False, description="Grow canvas to fit all systems")


class EngraverParameters(BaseModel):
    """Complete configuration for one render.

    Attributes:
        layout: Layout planner constraints.
        style: Rasterizer glyph style.
        export: Export options.
    """

    layout: LayoutConstraints = Field(
        default_factory=LayoutConstraints, description="Layout constraints"
    )
    style: RenderStyle = Field(
        default_factory=RenderStyle, description="Glyph style"
    )
    export: ExportParams = Field(
        default_factory=ExportParams, description="Export options"
    )
