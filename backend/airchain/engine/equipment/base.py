"""
Abstract base class for equipment models.
"""

from abc import ABC, abstractmethod

from airchain.models.air_state import AirState
from airchain.models.equipment import Airflow, TransformResult


class EquipmentModel(ABC):
    """Base class for all equipment models.

    A model is a pure function of (inlet air, conditions, airflow); it never
    mutates its inputs and never raises for physically inconsistent input.
    Those cases are reported through TransformResult.warnings instead.
    """

    @abstractmethod
    def transform(
        self, inlet: AirState, conditions, airflow: Airflow
    ) -> TransformResult:
        """Compute the outlet air state, results and pressure loss."""
        ...
