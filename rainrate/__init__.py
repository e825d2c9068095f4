"""Rain rate model with a BMI-style interface, its physics and configuration reader."""

__version__ = "1.0.0"