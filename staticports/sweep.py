"""Design table: port diameter over a grid of port counts and max velocities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional
import logging

import numpy as np
import pandas as pd

from .calculator import size_ports
from .errors import InvalidPhysicalModel
from .parameters import Parameters
from .units import Velocity, VelocityUnit

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "number_of_ports",
    "max_velocity_m_s",
    "port_diameter_mm",
    "port_diameter_mm_exact",
    "status",
]


def velocity_range(start: float, stop: float, num: int,
                   unit: VelocityUnit = VelocityUnit.M_S) -> list[Velocity]:
    """``num`` evenly spaced velocities from ``start`` to ``stop`` inclusive."""
    if num < 1:
        raise ValueError("num must be >= 1")
    return [Velocity(float(v), unit) for v in np.linspace(start, stop, int(num))]


def port_size_table(params: Parameters,
                    ports: Optional[Iterable[int]] = None,
                    velocities: Optional[Iterable[Velocity]] = None) -> pd.DataFrame:
    """
    One row per (port count, velocity) with everything else taken from ``params``.
    Combinations the model rejects are kept with NaN diameters and the reason in
    ``status`` so a table is always complete.
    """
    ports = list(ports) if ports is not None else [params.number_of_ports]
    velocities = list(velocities) if velocities is not None else [params.max_velocity]
    rows = []
    for n in ports:
        for v in velocities:
            p = params.replace(number_of_ports=n, max_velocity=v)
            try:
                res = size_ports(p)
            except InvalidPhysicalModel as e:
                logger.warning("n=%s v=%s: %s", n, v, e)
                rows.append(dict(number_of_ports=p.number_of_ports, max_velocity_m_s=v.m_s,
                                 port_diameter_mm=np.nan, port_diameter_mm_exact=np.nan,
                                 status=str(e)))
                continue
            rows.append(dict(number_of_ports=p.number_of_ports, max_velocity_m_s=v.m_s,
                             port_diameter_mm=res.port_diameter_mm,
                             port_diameter_mm_exact=res.port_diameter_mm_exact,
                             status="ok"))
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def write_table(df: pd.DataFrame, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
