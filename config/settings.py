"""Viewer configuration.

Input paths, colormap, window size and colors live in one ViewerConfig
that is passed into the pipeline entry point.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from core.colormap_image import ColormapKind
from core.common import PA_TO_HPA
from core.overlay import DEFAULT_LINE_COLOR


def _env_debug() -> bool:
    return os.getenv("PMSL_DEBUG", "0").lower() in ("1", "true", "yes", "on")


@dataclass
class ViewerConfig:
    grid_path: Path = Path("pmsl.nc")
    features_path: Optional[Path] = None
    colormap_kind: ColormapKind = ColormapKind.TURBO
    window_size: Tuple[int, int] = (600, 600)
    background: Tuple[float, ...] = (0.2, 0.3, 0.4)
    line_color: Tuple[float, ...] = DEFAULT_LINE_COLOR
    line_width: float = 1.0
    field_var: str = "msl"
    lat_var: str = "latitude"
    lon_var: str = "longitude"
    scale_factor: float = PA_TO_HPA
    debug: bool = field(default_factory=_env_debug)

    def __post_init__(self):
        self.grid_path = Path(self.grid_path)
        if self.features_path is not None:
            self.features_path = Path(self.features_path)
        self.colormap_kind = ColormapKind.parse(self.colormap_kind)
        w, h = self.window_size
        if w < 1 or h < 1:
            raise ValueError(f"window size must be positive, got {w}x{h}")
        self.window_size = (int(w), int(h))

    @classmethod
    def from_args(cls, args) -> "ViewerConfig":
        """Build from an argparse namespace produced by ``pmsl_cli``"""
        return cls(
            grid_path=args.grid,
            features_path=args.features,
            colormap_kind=args.colormap,
            window_size=(args.width, args.height),
            line_width=args.line_width,
            field_var=args.field_var,
            debug=args.debug or _env_debug(),
        )
