from __future__ import annotations
import argparse
from dataclasses import dataclass, field

from parapet.core.compositor import PlacementMode
from parapet.core.pixels import parse_color
from parapet.core.resample import Filter
from parapet.loader import DEFAULT_USER_AGENT

@dataclass
class Config:
    # Source
    image: str

    # Placement
    mode: PlacementMode
    resample: Filter
    background: tuple[int, int, int, int]  # r, g, b, a

    # Targets
    displays: list[str] = field(default_factory=list)
    detect: bool = False

    # Transfer
    out_path: str = "parapet-background.png"
    setter: str | None = None

    # Misc
    workers: int | None = None
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 15.0
    log_level: str = "INFO"


def _color(value: str) -> tuple[int, int, int, int]:
    try:
        return parse_color(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return n


def parse_args(argv: list[str] | None = None) -> Config:
    p = argparse.ArgumentParser("parapet", description="Place an image on every display as the desktop background.")
    p.add_argument("image", help="Image file path or http(s) URL")

    place = p.add_argument_group("Placement")
    place.add_argument("--mode", choices=[m.value for m in PlacementMode], default=PlacementMode.MAX.value,
                       help="max: cover and crop, fill: fit with borders, center: no resize, tile: repeat")
    place.add_argument("--filter", dest="resample", choices=[f.value for f in Filter], default=Filter.NEAREST.value,
                       help="Resampling filter for max/fill")
    place.add_argument("--background", type=_color, default="#000000",
                       help="Border/fill color as #rrggbb or #rrggbbaa")

    tgt = p.add_argument_group("Displays")
    tgt.add_argument("--display", dest="displays", action="append", default=[], metavar="WxH+X+Y",
                     help="Target display geometry (repeat for several displays)")
    tgt.add_argument("--detect", action="store_true", help="Query xrandr for connected displays")

    out = p.add_argument_group("Output")
    out.add_argument("--out", dest="out_path", type=str, default="parapet-background.png",
                     help="Where to write the assembled desktop image")
    out.add_argument("--setter", type=str, default=None,
                     help="Command that applies the image, e.g. 'feh --bg-tile {path}'")

    misc = p.add_argument_group("Misc")
    misc.add_argument("--workers", type=_positive_int, default=None, help="Compose threads (default: one per display)")
    misc.add_argument("--user-agent", type=str, default=DEFAULT_USER_AGENT)
    misc.add_argument("--timeout", type=float, default=15.0, help="Seconds to wait on URL fetches and tools")
    misc.add_argument("--log-level", type=str.upper, default="INFO",
                      choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    args = p.parse_args(argv)

    if not args.displays and not args.detect:
        p.error("no targets: pass --display WxH+X+Y and/or --detect")

    return Config(
        image=args.image,
        mode=PlacementMode(args.mode),
        resample=Filter(args.resample),
        background=args.background,
        displays=args.displays,
        detect=args.detect,
        out_path=args.out_path,
        setter=args.setter,
        workers=args.workers,
        user_agent=args.user_agent,
        timeout=args.timeout,
        log_level=args.log_level,
    )
