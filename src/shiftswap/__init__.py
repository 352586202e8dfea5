"""ShiftSwap - fixed-rate cross-asset swap quotes via SideShift.ai."""

__version__ = "0.1.0"
