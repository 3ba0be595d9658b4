"""
Object detection sensor ECU.
"""
from virtual_sensor.ecus.base_ecu import BaseECU
from virtual_sensor.apps.object_detection_model import ObjectDetectionModel
from virtual_sensor.params.sensor_model import SensorModelParams
from virtual_sensor.sim.readers import (
    MotionStateReader,
    ParticipantFeed,
    ParticipantSetWriter,
    SimulationTimeReader,
)

class ObjectDetectionECU(BaseECU):
    """
    Hosts an ObjectDetectionModel for the ego vehicle and connects it to the bus.
    Publishes 'PARTICIPANT_SET' once per step.
    """
    def __init__(self, name, bus, ego_name, simulation_id, sensor_model=None):
        super().__init__(name, bus)
        self.sensor_model = sensor_model or SensorModelParams()
        self.timer = SimulationTimeReader(f"{name}.Clock", bus)
        self.motion_state_reader = MotionStateReader(f"{name}.EgoState", bus, source=ego_name)
        self.participant_feed = ParticipantFeed(f"{name}.Feed", bus)
        self.participant_set_writer = ParticipantSetWriter(f"{name}.Writer", bus, sender=name)
        self.model = ObjectDetectionModel(
            self.participant_feed,
            self.participant_set_writer,
            self.timer,
            self.sensor_model,
            self.motion_state_reader,
            simulation_id,
        )
        self.ego_missing_reported = False

    def receive_message(self, msg_id, data, sender):
        if msg_id == 'SET_SENSOR_MODEL':
            try:
                self.sensor_model.update(data)
            except (AttributeError, TypeError, ValueError) as e:
                print(f"[{self.name}] Rejected malformed sensor model parameters: {e}")
                return
            print(f"[{self.name}] Sensor model set: range={self.sensor_model.detection_range}m, "
                  f"discard_age={self.sensor_model.discard_age}s")

    @property
    def detections(self):
        """Latest published detection snapshot."""
        return self.participant_set_writer.latest

    def step(self, dt):
        if not self.motion_state_reader.has_data() and not self.ego_missing_reported:
            print(f"[{self.name}] No ego telemetry yet, detecting around the origin")
            self.ego_missing_reported = True
        self.model.run()
