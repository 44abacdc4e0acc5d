from __future__ import annotations
import logging
import sys
from typing import Optional

from parapet.config import Config, parse_args
from parapet.core.compositor import Compositor
from parapet.core.pixels import rgba_to_bgra
from parapet.display import resolve_displays
from parapet.errors import ParapetError
from parapet.loader import load_image
from parapet.output.desktop import DesktopWriter

logger = logging.getLogger("parapet")


def run(cfg: Config) -> int:
    displays = resolve_displays(cfg.displays, detect=cfg.detect, timeout=cfg.timeout)
    for d in displays:
        logger.info("display %s", d)

    image = load_image(cfg.image, user_agent=cfg.user_agent, timeout=cfg.timeout)

    comp = Compositor(
        mode=cfg.mode,
        resample=cfg.resample,
        background=rgba_to_bgra(cfg.background),
        workers=cfg.workers,
    )
    canvases = comp.compose_all(image, [d.size for d in displays])

    writer = DesktopWriter(cfg.out_path, setter=cfg.setter, background=cfg.background[:3], timeout=cfg.timeout)
    writer.send(zip(displays, canvases))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    cfg = parse_args(argv)
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s [%(name)s] %(levelname)s %(message)s")

    try:
        return run(cfg)
    except ParapetError as exc:
        logger.error("%s", exc)
    except (RuntimeError, ValueError) as exc:
        logger.error("transfer failed: %s", exc)
    except KeyboardInterrupt:
        pass
    return 1


if __name__ == "__main__":
    sys.exit(main())
