"""GuideResto - restaurant directory with a hand-written data mapper layer."""

__version__ = "1.0.0"
