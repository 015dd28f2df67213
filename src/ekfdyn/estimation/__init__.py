"""Extended Kalman Filter built on STM propagation.

- :class:`FilterState` -- state estimate and covariance
- :class:`FilterResult` -- measurement update result with diagnostics
- :func:`ekf_predict` -- time update using the propagated STM
- :func:`ekf_update` -- measurement update (Joseph form)
- :func:`position_measurement` -- direct position measurement model
"""

from ekfdyn.estimation._types import FilterResult, FilterState
from ekfdyn.estimation.ekf import ekf_predict, ekf_update, position_measurement

__all__ = [
    "FilterState",
    "FilterResult",
    "ekf_predict",
    "ekf_update",
    "position_measurement",
]
