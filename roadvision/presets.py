"""Render presets: how each visibility status is drawn and described."""

from __future__ import annotations

from dataclasses import dataclass

from .types import AnalyzedVehicle, VisionStatus


@dataclass(frozen=True)
class RenderPreset:
    visible_color: str = "#00FF00"
    partial_color: str = "#0000FF"
    hidden_color: str = "#FF0000"
    fov_line_color: str = "#FF8800"
    min_partial_opacity: float = 0.3

    def status_color(self, status: VisionStatus) -> str:
        match status:
            case VisionStatus.FULLY_VISIBLE:
                return self.visible_color
            case VisionStatus.PARTIALLY_VISIBLE:
                return self.partial_color
            case VisionStatus.FULLY_HIDDEN:
                return self.hidden_color

    def opacity(self, av: AnalyzedVehicle) -> float:
        """Partially visible vehicles fade with their ratio, to a floor."""
        if av.vision_status is VisionStatus.PARTIALLY_VISIBLE:
            return max(self.min_partial_opacity, av.visibility_ratio)
        return 1.0


DEFAULT_PRESET = RenderPreset()


def status_label(status: VisionStatus) -> str:
    match status:
        case VisionStatus.FULLY_VISIBLE:
            return "Fully visible"
        case VisionStatus.PARTIALLY_VISIBLE:
            return "Partially visible"
        case VisionStatus.FULLY_HIDDEN:
            return "Fully hidden"
