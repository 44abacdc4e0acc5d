# parapet/output/desktop.py
from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Sequence, Tuple

from PIL import Image

from parapet.core.canvas import Canvas
from parapet.display import Display

logger = logging.getLogger(__name__)

Placed = Tuple[Display, Canvas]


class DesktopWriter:
    """Hands finished canvases to the desktop.

    All canvases are pasted at their display origins onto one image that spans
    the whole desktop. That image is saved to ``out_path`` and, when a setter
    command is configured, passed to it (``{path}`` is replaced with the
    saved file; without a placeholder the path is appended).
    """

    def __init__(
        self,
        out_path: str | Path,
        *,
        setter: str | None = None,
        background: tuple[int, int, int] = (0, 0, 0),
        timeout: float = 30.0,
    ):
        self.out_path = Path(out_path).expanduser()
        self.setter = setter
        self.background = tuple(background[:3])
        self.timeout = float(timeout)

    # ------------------------- helpers -------------------------

    @staticmethod
    def desktop_size(placed: Sequence[Placed]) -> tuple[int, int]:
        width = max((d.x + c.width for d, c in placed), default=0)
        height = max((d.y + c.height for d, c in placed), default=0)
        return width, height

    def assemble(self, placed: Iterable[Placed]) -> Image.Image:
        items = list(placed)
        if not items:
            raise ValueError("nothing to assemble: no canvases")
        for display, canvas in items:
            if canvas.size != display.size:
                raise ValueError(f"canvas {canvas.width}x{canvas.height} does not match {display}")

        desktop = Image.new("RGB", self.desktop_size(items), self.background)
        for display, canvas in items:
            logger.info("%d,%d - %d,%d", display.x, display.y, canvas.width, canvas.height)
            desktop.paste(canvas.to_image(), display.origin)
        return desktop

    def _setter_cmd(self) -> list[str]:
        args = shlex.split(self.setter or "")
        if not args:
            raise RuntimeError("setter command is empty")
        path = str(self.out_path)
        if any("{path}" in a for a in args):
            return [a.replace("{path}", path) for a in args]
        return args + [path]

    # ------------------------- lifecycle -------------------------

    def save(self, desktop: Image.Image) -> Path:
        try:
            self.out_path.parent.mkdir(parents=True, exist_ok=True)
            desktop.save(self.out_path)
        except (OSError, ValueError) as exc:
            raise RuntimeError(f"cannot write {self.out_path}: {exc}") from exc
        logger.info("wrote %dx%d desktop image to %s", desktop.width, desktop.height, self.out_path)
        return self.out_path

    def apply(self) -> None:
        cmd = self._setter_cmd()
        if shutil.which(cmd[0]) is None:
            raise RuntimeError(f"setter executable '{cmd[0]}' not found in PATH")
        logger.debug("running setter: %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except (subprocess.TimeoutExpired, OSError) as exc:
            raise RuntimeError(f"setter '{cmd[0]}' failed: {exc}") from exc
        if proc.returncode != 0:
            raise RuntimeError(f"setter '{cmd[0]}' exited with {proc.returncode}: {proc.stderr.strip()}")

    def send(self, placed: Iterable[Placed]) -> Path:
        path = self.save(self.assemble(placed))
        if self.setter:
            self.apply()
        return path
