"""Core of a 3D model editor: config files, keyframe animation, track views and launch options."""

__version__ = "0.1.0"

__all__ = [
    "animation",
    "cfgparser",
    "filesearch",
    "launcher",
    "ptrvec",
    "trackview",
]