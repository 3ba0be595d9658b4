
class SensorModelParams:
    """
    Parameters of the simulated object detection sensor.
    Defaults may be overridden at runtime via 'SET_SENSOR_MODEL' messages.
    """
    def __init__(self, detection_range=100.0, discard_age=1.0):
        self.detection_range = detection_range # meters
        self.discard_age = discard_age # seconds

    def get_object_detection_range(self):
        return self.detection_range

    def get_object_discard_age(self):
        return self.discard_age

    def update(self, data):
        """Apply 'detection_range' and/or 'discard_age' from a message payload."""
        detection_range = float(data.get('detection_range', self.detection_range))
        discard_age = float(data.get('discard_age', self.discard_age))
        self.detection_range = detection_range
        self.discard_age = discard_age
