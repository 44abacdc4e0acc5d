from __future__ import annotations
import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Iterable, List, Optional

from parapet.core.rect import Rect
from parapet.errors import DisplayError

logger = logging.getLogger(__name__)

_GEOMETRY = re.compile(r"^\s*(\d+)x(\d+)(?:\+(\d+)\+(\d+))?\s*$")
# "HDMI-1 connected primary 1920x1080+0+0 (normal left ...) 527mm x 296mm"
_XRANDR_LINE = re.compile(r"^(\S+)\s+connected\s+(?:primary\s+)?(\d+)x(\d+)\+(\d+)\+(\d+)")


@dataclass(frozen=True)
class Display:
    """A physical output: its size plus where it sits on the desktop."""
    name: str
    x: int
    y: int
    width: int
    height: int

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def origin(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def has_size(self) -> bool:
        return self.width > 0 and self.height > 0

    def __str__(self) -> str:
        return f"{self.name} {self.width}x{self.height}+{self.x}+{self.y}"


def parse_geometry(text: str, name: str | None = None) -> Display:
    """Parse ``WxH`` or ``WxH+X+Y``."""
    m = _GEOMETRY.match(text or "")
    if not m:
        raise DisplayError(f"invalid geometry {text!r}, expected WxH+X+Y")
    w, h, x, y = m.groups()
    return Display(name or text.strip(), int(x or 0), int(y or 0), int(w), int(h))


def parse_xrandr(output: str) -> List[Display]:
    displays: List[Display] = []
    for line in output.splitlines():
        m = _XRANDR_LINE.match(line)
        if not m:
            continue
        name, w, h, x, y = m.groups()
        displays.append(Display(name, int(x), int(y), int(w), int(h)))
    return displays


def detect_displays(timeout: float = 5.0) -> List[Display]:
    """Ask ``xrandr`` for every connected, active output."""
    if shutil.which("xrandr") is None:
        raise DisplayError("xrandr executable not found in PATH")
    try:
        proc = subprocess.run(
            ["xrandr", "--query"],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=True,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as exc:
        raise DisplayError(f"xrandr query failed: {exc}") from exc
    return parse_xrandr(proc.stdout)


def usable(displays: Iterable[Display]) -> List[Display]:
    """Drop outputs without area; they cannot take a canvas."""
    out: List[Display] = []
    for d in displays:
        if d.has_size():
            out.append(d)
        else:
            logger.warning("skipping display %s: no visible area", d)
    return out


def resolve_displays(geometries: Iterable[str], detect: bool = False, timeout: Optional[float] = None) -> List[Display]:
    """Build the validated, fully materialized list of targets."""
    found: List[Display] = []
    for i, text in enumerate(geometries):
        found.append(parse_geometry(text, name=f"display-{i}"))
    if detect:
        found.extend(detect_displays(5.0 if timeout is None else timeout))

    displays = usable(found)
    if not displays:
        raise DisplayError("no usable display; pass --display WxH+X+Y or --detect")
    return displays
