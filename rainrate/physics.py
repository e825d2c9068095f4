"""Water density and rain-rate conversions."""

from __future__ import annotations


def rho_from_temperature(temp: float) -> float:
    """Density of water in kg m-3 for a temperature in degrees Celsius."""
    temp2 = temp * temp
    temp3 = temp2 * temp
    temp4 = temp3 * temp
    return (
        999.99399
        + 0.04216485 * temp
        - 0.007097451 * temp2
        + 0.00003509571 * temp3
        - 9.9037785e-8 * temp4
    )


def rain_rate(rho: float, precip: float, interval: float) -> float:
    """Rain rate in m s-1 from precipitation (kg m-2) over ``interval`` seconds."""
    return (precip / rho) / interval


def precipitation(rho: float, rain_rate: float, interval: float) -> float:
    """Precipitation in kg m-2 from a rain rate (m s-1) over ``interval`` seconds."""
    return (rain_rate * rho) * interval


def format_rain_rate(rain_rate: float) -> str:
    """Format a rain rate with two decimal places."""
    return f"{rain_rate:.2f}"