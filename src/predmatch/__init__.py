"""PredMatch - cross-venue prediction market matching and opportunity detection."""

__version__ = "0.1.0"
