#!/usr/bin/env python3

import argparse
import logging
import sys

from config.settings import ViewerConfig
from core.colormap_image import ColormapKind
from core.errors import PmslViewerError
from core.render_target import AggRenderTarget
from smart_pmsl.processor_core import load_scene, render_frame
from smart_pmsl.utils import setup_logging

logger = logging.getLogger(__name__)

ZOOM_STEP = 1.1


def build_parser():
    parser = argparse.ArgumentParser(description="Sea-level pressure map viewer")
    parser.add_argument("grid", help="NetCDF file with msl / latitude / longitude")
    parser.add_argument("--features", help="GeoJSON coastline/border polygons (overlay off when omitted)")
    parser.add_argument("--colormap", default=ColormapKind.TURBO.value,
                        choices=[k.value.lower() for k in ColormapKind],
                        type=str.lower, help="Color ramp (default: turbo)")
    parser.add_argument("--field-var", default="msl", help="Pressure variable name (default: msl)")
    parser.add_argument("--width", type=int, default=600, help="Window width in pixels (default: 600)")
    parser.add_argument("--height", type=int, default=600, help="Window height in pixels (default: 600)")
    parser.add_argument("--line-width", type=float, default=1.0, help="Overlay line width in pixels")
    parser.add_argument("--headless", action="store_true", help="Render one offscreen frame and exit")
    parser.add_argument("--log-dir", help="Also write the log to this directory")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    return parser


def run_interactive(scene, config):
    """Open a matplotlib window and redraw on resize / zoom / pan"""
    import matplotlib.pyplot as plt

    width, height = config.window_size
    fig = plt.figure(figsize=(width / 100, height / 100), dpi=100)
    fig.canvas.manager.set_window_title("PMSL viewer")
    target = AggRenderTarget(width, height, dpi=fig.dpi, figure=fig)
    drag = {"anchor": None}

    def redraw():
        render_frame(scene, target)
        fig.canvas.draw_idle()

    def screen_xy(event):
        # matplotlib display coords start bottom-left
        return (event.x, target.height - event.y)

    def on_resize(event):
        target.resize(event.width, event.height)
        redraw()

    def on_scroll(event):
        factor = ZOOM_STEP if event.button == "up" else 1.0 / ZOOM_STEP
        target.zoom_at(factor, screen_xy(event))
        redraw()

    def on_press(event):
        if event.button == 1:
            drag["anchor"] = (screen_xy(event), target.pan)

    def on_motion(event):
        if drag["anchor"] is None:
            return
        (x0, y0), (px, py) = drag["anchor"]
        x1, y1 = screen_xy(event)
        target.set_camera(target.zoom, (px + x1 - x0, py + y1 - y0))
        redraw()

    def on_release(event):
        drag["anchor"] = None

    fig.canvas.mpl_connect("resize_event", on_resize)
    fig.canvas.mpl_connect("scroll_event", on_scroll)
    fig.canvas.mpl_connect("button_press_event", on_press)
    fig.canvas.mpl_connect("motion_notify_event", on_motion)
    fig.canvas.mpl_connect("button_release_event", on_release)

    redraw()
    plt.show()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ViewerConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    setup_logging(debug=config.debug, output_dir=args.log_dir)

    try:
        scene = load_scene(config)
    except PmslViewerError as e:
        logger.error(f"Failed to load scene: {e}")
        return 1

    if args.headless:
        target = AggRenderTarget(*config.window_size)
        dest_rect = render_frame(scene, target)
        frame = target.to_rgba()
        logger.info(f"Rendered {frame.shape[1]}x{frame.shape[0]} frame, raster at "
                    f"({dest_rect.x:.1f}, {dest_rect.y:.1f}) {dest_rect.width:.1f}x{dest_rect.height:.1f}")
        return 0

    run_interactive(scene, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
