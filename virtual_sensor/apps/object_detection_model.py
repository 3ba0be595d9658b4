"""
Simple model for sensor detection of traffic participants in the ego vehicle's vicinity.
"""
import math

FULL_CERTAINTY = 100.0


def update_detections(latest_data, updates, ego_location, sensor_range, simulation_id):
    """
    Upsert every in-range update into a copy of `latest_data`.

    Updates of the ego vehicle itself are ignored. Updates at or beyond
    `sensor_range` leave any existing record for that participant as is.
    Later updates for the same tracking id overwrite earlier ones.
    """
    table = dict(latest_data)
    for p in updates:
        if p.tracking_id == simulation_id:
            continue
        if math.dist(p.center, ego_location) < sensor_range:
            table[p.tracking_id] = p
    return table


def collect_detections(latest_data, t_now, discard_age):
    """
    Records younger than `discard_age`, ordered by tracking id and reported
    with full existence certainty. Stored records are not modified.
    """
    detections = []
    for tracking_id in sorted(latest_data):
        p = latest_data[tracking_id]
        if t_now - p.observation_time < discard_age:
            detections.append(p.with_certainty(FULL_CERTAINTY))
    return detections


class ObjectDetectionModel:
    """
    Publishes the set of traffic participants currently detected by the ego vehicle.

    Collaborators are duck-typed:
        participant_feed: has_next() / get_next() -> Participant
        participant_set_writer: write(list of Participant)
        timer: has_data() / get_data() -> simulation time
        sensor_model: get_object_detection_range() / get_object_discard_age()
        motion_state_reader: get_data() -> MotionState

    `simulation_id` is the ego vehicle's tracking id, required to avoid
    detecting itself.
    """
    def __init__(self, participant_feed, participant_set_writer, timer,
                 sensor_model, motion_state_reader, simulation_id):
        self.simulation_id = simulation_id
        self.participant_feed = participant_feed
        self.participant_set_writer = participant_set_writer
        self.timer = timer
        self.sensor_model = sensor_model
        self.motion_state_reader = motion_state_reader
        self.ego_location = (0.0, 0.0, 0.0)
        # tracking id -> latest in-range update. Records that age out of the
        # output are kept here indefinitely.
        self.latest_data = {}

    def _drain_feed(self):
        updates = []
        while self.participant_feed.has_next():
            updates.append(self.participant_feed.get_next())
        return updates

    def run(self):
        """Ingest pending participant updates and publish the current detections."""
        if not self.timer.has_data():
            return
        t_now = self.timer.get_data()

        sensor_range = self.sensor_model.get_object_detection_range()
        discard_age = self.sensor_model.get_object_discard_age()

        motion_state = self.motion_state_reader.get_data()
        self.ego_location = (motion_state.x, motion_state.y, 0.0)

        self.latest_data = update_detections(
            self.latest_data,
            self._drain_feed(),
            self.ego_location,
            sensor_range,
            self.simulation_id,
        )

        self.participant_set_writer.write(
            collect_detections(self.latest_data, t_now, discard_age)
        )
