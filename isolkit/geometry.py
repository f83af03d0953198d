"""Geometry of idealized hysteresis envelopes.

An envelope cycle is a closed quadrilateral in the force-displacement plane.
From it this module derives the effective (secant) stiffness, the energy
dissipated per cycle (polygon area) and the equivalent viscous damping
ratio. All functions are pure; they never modify the cycle.

Vertex roles are positional: vertices 1 and 3 are taken as the two
horizontal extremes because the operator picks them that way, not because
an extremum search found them.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from isolkit.exceptions import DegenerateCycle

N_VERTICES = 4


@dataclass(frozen=True, eq=False)
class EnvelopeCycle:
    """Closed quadrilateral loop; ``displacement`` and ``force`` hold 5 points.

    The 5th point repeats the 1st and is derived, never picked.
    """

    displacement: np.ndarray
    force: np.ndarray

    def __post_init__(self):
        d = np.array(self.displacement, dtype=float)
        f = np.array(self.force, dtype=float)
        if d.shape != (N_VERTICES + 1,) or f.shape != (N_VERTICES + 1,):
            raise ValueError(
                f"An envelope cycle needs {N_VERTICES} vertices plus the closing point"
            )
        if d[0] != d[-1] or f[0] != f[-1]:
            raise ValueError("The closing point must repeat the first vertex")
        d.setflags(write=False)
        f.setflags(write=False)
        object.__setattr__(self, "displacement", d)
        object.__setattr__(self, "force", f)

    @classmethod
    def from_picks(cls, picks: Iterable[Sequence[float]]) -> "EnvelopeCycle":
        """Close ``N_VERTICES`` (displacement, force) picks into a cycle."""
        points = [(float(p[0]), float(p[1])) for p in picks]
        if len(points) != N_VERTICES:
            raise ValueError(f"Expected {N_VERTICES} picks, got {len(points)}")
        points.append(points[0])
        d, f = zip(*points)
        return cls(displacement=np.array(d), force=np.array(f))

    @property
    def vertices(self) -> Tuple[Tuple[float, float], ...]:
        """The selected vertices, without the closing point."""
        return tuple(
            (float(d), float(f))
            for d, f in zip(self.displacement[:N_VERTICES], self.force[:N_VERTICES])
        )


@dataclass(frozen=True)
class EnvelopeMetrics:
    effective_stiffness: float  # kN/m
    dissipated_energy: float  # kN*m
    equivalent_damping: float  # %, one decimal


def _round_half_away(value: float, decimals: int = 1) -> float:
    scale = 10.0**decimals
    return float(math.copysign(math.floor(abs(value) * scale + 0.5) / scale, value))


def effective_stiffness(cycle: EnvelopeCycle) -> float:
    """Secant stiffness between vertices 1 and 3.

    k_eff = (|F1| + |F3|) / (|D1| + |D3|)

    Raises:
        DegenerateCycle: If D1 and D3 are both zero.
    """
    d, f = cycle.displacement, cycle.force
    span = abs(d[0]) + abs(d[2])
    if span == 0.0:
        raise DegenerateCycle(
            "Vertices 1 and 3 both have zero displacement; k_eff is undefined."
        )
    return float((abs(f[0]) + abs(f[2])) / span)


def signed_area(cycle: EnvelopeCycle) -> float:
    """Signed shoelace area of the 4 vertices (negative when clockwise)."""
    d = cycle.displacement[:N_VERTICES]
    f = cycle.force[:N_VERTICES]
    return float((np.dot(d, np.roll(f, -1)) - np.dot(f, np.roll(d, -1))) / 2.0)


def dissipated_energy(cycle: EnvelopeCycle) -> float:
    """Energy dissipated in one cycle, i.e. the area enclosed by the envelope.

    Self-intersecting quadrilaterals (inconsistent picking order) return a
    value without warning; see ``isolkit.digitizer.check_clockwise``.
    """
    return abs(signed_area(cycle))


def equivalent_damping(cycle: EnvelopeCycle, k_eff: float, energy: float) -> float:
    """Equivalent viscous damping ratio in percent, rounded to one decimal.

    xi_eff = (1/pi) * E / (k_eff * (D1^2 + D3^2)) * 100
    """
    d = cycle.displacement
    denominator = k_eff * (d[0] ** 2 + d[2] ** 2)
    if denominator == 0.0:
        raise DegenerateCycle("Zero strain energy at the extremes; xi_eff is undefined.")
    xi = (1.0 / math.pi) * energy / denominator * 100.0
    return _round_half_away(float(xi), 1)


def compute_metrics(cycle: EnvelopeCycle) -> EnvelopeMetrics:
    """Derive all envelope metrics; stiffness is checked before damping."""
    k_eff = effective_stiffness(cycle)
    energy = dissipated_energy(cycle)
    xi_eff = equivalent_damping(cycle, k_eff, energy)
    return EnvelopeMetrics(
        effective_stiffness=k_eff,
        dissipated_energy=energy,
        equivalent_damping=xi_eff,
    )
