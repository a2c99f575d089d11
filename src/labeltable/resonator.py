"""Second-order digital resonators and anti-resonators (formant filters)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol

import numpy as np


class FilterKind(str, Enum):
    RESONATOR = "resonator"
    ANTI_RESONATOR = "anti_resonator"
    CONSTANT_GAIN_RESONATOR = "constant_gain_resonator"


class Filter(Protocol):
    def reset_memory(self) -> None: ...

    def set_coefficients(self, frequency: float, bandwidth: float) -> None: ...

    def process_sample(self, x: float) -> float: ...


def _pole_coefficients(dt: float, frequency: float, bandwidth: float):
    """(a, b, c) for a pole pair, with unit gain at 0 Hz."""
    r = math.exp(-math.pi * dt * bandwidth)
    c = -(r * r)
    b = 2.0 * r * math.cos(2.0 * math.pi * frequency * dt)
    a = 1.0 - b - c
    return a, b, c


@dataclass
class Resonator:
    """y[n] = a x[n] + b y[n-1] + c y[n-2].

    With ``normalise_at_dc`` the gain is 0 dB at 0 Hz, otherwise 0 dB at the
    resonance frequency.
    """

    dt: float
    normalise_at_dc: bool = True
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    p1: float = field(default=0.0, repr=False)
    p2: float = field(default=0.0, repr=False)

    def reset_memory(self) -> None:
        self.p1 = self.p2 = 0.0

    def set_coefficients(self, frequency: float, bandwidth: float) -> None:
        self.a, self.b, self.c = _pole_coefficients(self.dt, frequency, bandwidth)
        if not self.normalise_at_dc:
            self.a = (1.0 + self.c) * math.sin(2.0 * math.pi * frequency * self.dt)

    def process_sample(self, x: float) -> float:
        y = self.a * x + self.b * self.p1 + self.c * self.p2
        self.p2 = self.p1
        self.p1 = y
        return y


@dataclass
class AntiResonator:
    """y[n] = a (x[n] - b x[n-1] - c x[n-2]), the inverse of a resonator.

    A frequency and bandwidth both <= 0 set a = 1, b = -2, c = 1.
    """

    dt: float
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    p1: float = field(default=0.0, repr=False)
    p2: float = field(default=0.0, repr=False)

    def reset_memory(self) -> None:
        self.p1 = self.p2 = 0.0

    def set_coefficients(self, frequency: float, bandwidth: float) -> None:
        if frequency <= 0.0 and bandwidth <= 0.0:
            self.a, self.b, self.c = 1.0, -2.0, 1.0
            return
        _, self.b, self.c = _pole_coefficients(self.dt, frequency, bandwidth)
        self.a = 1.0 / (1.0 - self.b - self.c)

    def process_sample(self, x: float) -> float:
        y = self.a * (x - self.b * self.p1 - self.c * self.p2)
        self.p2 = self.p1
        self.p1 = x
        return y


@dataclass
class ConstantGainResonator:
    """y[n] = a (x[n] + d x[n-2]) + b y[n-1] + c y[n-2], with a = 1 - r and d = -r."""

    dt: float
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    p1: float = field(default=0.0, repr=False)
    p2: float = field(default=0.0, repr=False)
    p3: float = field(default=0.0, repr=False)
    p4: float = field(default=0.0, repr=False)

    def reset_memory(self) -> None:
        self.p1 = self.p2 = self.p3 = self.p4 = 0.0

    def set_coefficients(self, frequency: float, bandwidth: float) -> None:
        _, self.b, self.c = _pole_coefficients(self.dt, frequency, bandwidth)
        r = math.exp(-math.pi * self.dt * bandwidth)
        self.a = 1.0 - r
        self.d = -r

    def process_sample(self, x: float) -> float:
        y = self.a * (x + self.d * self.p4) + self.b * self.p1 + self.c * self.p2
        self.p2 = self.p1
        self.p1 = y
        self.p4 = self.p3
        self.p3 = x
        return y


def create_filter(kind: FilterKind, dt: float, normalise_at_dc: bool = True) -> Filter:
    """Filter of the given kind for sampling period ``dt``, initially all-pass."""
    kind = FilterKind(kind)
    if dt <= 0.0:
        raise ValueError(f"Sampling period must be positive, got {dt}")
    if kind is FilterKind.RESONATOR:
        return Resonator(dt=dt, normalise_at_dc=normalise_at_dc)
    if kind is FilterKind.ANTI_RESONATOR:
        return AntiResonator(dt=dt)
    return ConstantGainResonator(dt=dt)


def filter_signal(flt: Filter, samples: Iterable[float]) -> np.ndarray:
    """Run every sample through ``flt`` (memory is kept between calls)."""
    return np.array([flt.process_sample(float(x)) for x in samples], dtype=float)
