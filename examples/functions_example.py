"""Example custom functions module for cssfn.

Usage:
    cssfn process examples/example.css --functions-file examples/functions_example.py
    cssfn value --functions-file examples/functions_example.py -- "--negative(10px)"
"""

from cssfn import custom_function

BREAKPOINTS = {"sm": "640px", "md": "768px", "lg": "1024px"}


@custom_function
def negative(value: str) -> str:
    """--negative(10px) -> calc(-1 * 10px)"""
    return f"calc(-1 * {value})"


@custom_function("--repeat")
def repeat_track(count: str, track: str) -> str:
    return f"repeat({count}, {track})"


@custom_function
def breakpoint(name: str) -> str:
    """Look up a named breakpoint; unknown names are reported as warnings."""
    if name not in BREAKPOINTS:
        raise ValueError(f"Unknown breakpoint {name!r}, expected one of {', '.join(BREAKPOINTS)}")
    return BREAKPOINTS[name]


@custom_function
def fluid(min_size: str, max_size: str) -> str:
    """Clamp a size between two values, growing with the viewport."""
    return f"clamp({min_size}, {min_size} + 2vw, {max_size})"


@custom_function
def stack(*layers: str) -> str:
    """Join layers into a comma-separated list, e.g. for box-shadow."""
    return ", ".join(layers)
