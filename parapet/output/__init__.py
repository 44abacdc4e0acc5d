from .desktop import DesktopWriter
