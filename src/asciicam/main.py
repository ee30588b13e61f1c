"""
AsciiCam Main Entry Point
=========================

Command-line entry point: builds the source, display, clock and app
from settings plus CLI overrides, then runs until the display is
closed, SIGINT/SIGTERM arrives, or (with --serve) the control API
stops it.

Usage:
    asciicam                       # camera 0 in an OpenCV window
    asciicam --display terminal --columns 100 --charset blocks
    asciicam --source portrait.jpg --invert
    asciicam --serve --port 8002   # also expose the control API
"""

import argparse
import asyncio
import logging
import signal
import sys
from typing import List, Optional

from asciicam.app import AsciiCamApp
from asciicam.clock import FrameClock
from asciicam.config import Settings, load_config, setup_logging
from asciicam.display import CanvasDisplay, Display, TerminalDisplay, WindowDisplay
from asciicam.models.controls import RenderControls
from asciicam.stream.source import CameraSource, ImageSource, SourceError, SourceFrame


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asciicam",
        description="Render a live camera as character art",
    )
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument(
        "--source",
        help="Camera index or image path (default: settings.source)",
    )
    parser.add_argument(
        "--display",
        choices=["window", "terminal", "none"],
        help="Output surface",
    )
    parser.add_argument("--columns", type=float, help="Base columns (40-240)")
    parser.add_argument("--density", type=float, help="Density factor, e.g. 1.5")
    parser.add_argument("--charset", help="Preset name or literal ramp")
    parser.add_argument("--invert", action="store_true", default=None, help="Invert luminance")
    parser.add_argument("--fps", type=float, help="Ticks per second")
    parser.add_argument("--serve", action="store_true", default=None, help="Serve the control API")
    parser.add_argument("--port", type=int, help="Control API port")
    return parser


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of settings with CLI overrides applied."""
    data = settings.model_dump()

    if args.source is not None:
        if args.source.isdigit():
            data["source"]["camera_index"] = int(args.source)
            data["source"]["image_path"] = None
        else:
            data["source"]["image_path"] = args.source
    if args.display is not None:
        data["display"]["mode"] = args.display
    for key in ("columns", "density", "charset", "invert"):
        value = getattr(args, key)
        if value is not None:
            data["render"][key] = value
    if args.fps is not None:
        data["clock"]["fps"] = args.fps
    if args.serve is not None:
        data["server"]["enabled"] = args.serve
    if args.port is not None:
        data["server"]["port"] = args.port

    return Settings.model_validate(data)


def create_source(settings: Settings) -> SourceFrame:
    if settings.source.image_path:
        return ImageSource.from_file(settings.source.image_path)
    return CameraSource(camera_index=settings.source.camera_index)


def create_display(settings: Settings) -> Display:
    cfg = settings.display
    if cfg.mode == "terminal":
        return TerminalDisplay()

    canvas_args = dict(
        width=cfg.width,
        height=cfg.height,
        font_scale=cfg.font_scale,
        thickness=cfg.thickness,
        background=cfg.background,
        foreground=cfg.foreground,
    )
    if cfg.mode == "window":
        return WindowDisplay(window_name=cfg.window_name, **canvas_args)
    return CanvasDisplay(**canvas_args)


def create_app(settings: Settings) -> AsciiCamApp:
    render = settings.render
    controls = RenderControls(
        columns=render.columns,
        density=render.density,
        charset=render.charset,
        invert=render.invert,
        char_aspect=render.char_aspect,
    )
    return AsciiCamApp(
        source=create_source(settings),
        display=create_display(settings),
        clock=FrameClock(fps=settings.clock.fps, log_every_n_ticks=settings.clock.log_every_n_ticks),
        controls=controls,
    )


async def run(settings: Settings) -> int:
    """Run the app (and optionally the control API) until stopped."""
    cam = create_app(settings)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, cam.stop)
        except NotImplementedError:
            pass  # Windows

    server = None
    server_task = None
    if settings.server.enabled:
        import uvicorn

        from asciicam.api import create_api

        server = uvicorn.Server(uvicorn.Config(
            create_api(cam),
            host=settings.server.host,
            port=settings.server.port,
            log_level=settings.logging.level.lower(),
        ))
        server_task = asyncio.create_task(server.serve(), name="control_api")
        logger.info(f"Control API on http://{settings.server.host}:{settings.server.port}")

    started = cam.start()
    if not started and server is None:
        return 1

    try:
        if server_task is not None:
            await server_task
            cam.stop()
        await cam.wait()
    finally:
        cam.stop()
        cam.display.close()
        if server is not None:
            server.should_exit = True

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = apply_args(load_config(args.config), args)
    except Exception as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(settings)

    try:
        return asyncio.run(run(settings))
    except SourceError as e:
        logger.error(f"Source error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
