"""
Traffic participant and ego motion records exchanged on the bus.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass
class Participant:
    """
    State of one traffic participant as broadcast by its own plant.

    Fields:
        tracking_id: Stable integer identity of the actor
        center: World position (x, y, z), z is 0.0 in this model
        observation_time: Simulation time the state was produced at
        existence_certainty: Confidence in [0, 100]
    """
    tracking_id: int
    center: Tuple[float, float, float]
    observation_time: float
    existence_certainty: float = 0.0
    velocity: Tuple[float, float] = (0.0, 0.0)
    yaw: float = 0.0
    classification: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.tracking_id, int) or isinstance(self.tracking_id, bool):
            raise TypeError(
                f"tracking_id must be int, got {type(self.tracking_id).__name__}"
            )
        if len(self.center) == 2:
            self.center = (float(self.center[0]), float(self.center[1]), 0.0)
        elif len(self.center) == 3:
            self.center = tuple(float(c) for c in self.center)
        else:
            raise ValueError(f"center must have 2 or 3 components, got {self.center}")
        if not (0.0 <= self.existence_certainty <= 100.0):
            raise ValueError(
                f"existence_certainty must be in [0, 100], got {self.existence_certainty}"
            )

    def with_certainty(self, certainty: float) -> "Participant":
        """Copy of this record with a different existence certainty."""
        return replace(self, existence_certainty=certainty)

    def to_dict(self) -> dict:
        return {
            'tracking_id': self.tracking_id,
            'center': self.center,
            'observation_time': self.observation_time,
            'existence_certainty': self.existence_certainty,
            'velocity': self.velocity,
            'yaw': self.yaw,
            'classification': self.classification,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Participant":
        """Build a record from a 'PARTICIPANT_STATE' payload."""
        return cls(
            tracking_id=data['tracking_id'],
            center=tuple(data['center']),
            observation_time=float(data['observation_time']),
            existence_certainty=data.get('existence_certainty', 0.0),
            velocity=tuple(data.get('velocity', (0.0, 0.0))),
            yaw=data.get('yaw', 0.0),
            classification=data.get('classification'),
        )


@dataclass
class MotionState:
    """Ego vehicle motion state (planar)."""
    x: float = 0.0
    y: float = 0.0
    yaw: float = 0.0
    v: float = 0.0
    time: float = 0.0
