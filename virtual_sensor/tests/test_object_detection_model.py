"""
Object Detection Model Test Suite.
Exercises the aggregation logic in isolation with scripted collaborators.
"""
import pytest
from virtual_sensor.apps.object_detection_model import (
    ObjectDetectionModel,
    collect_detections,
    update_detections,
)
from virtual_sensor.env.participant import MotionState, Participant
from virtual_sensor.params.sensor_model import SensorModelParams


class ScriptedTimer:
    def __init__(self, time=None):
        self.time = time

    def has_data(self):
        return self.time is not None

    def get_data(self):
        return self.time


class ScriptedFeed:
    def __init__(self):
        self.pending = []

    def push(self, *participants):
        self.pending.extend(participants)

    def has_next(self):
        return len(self.pending) > 0

    def get_next(self):
        return self.pending.pop(0)


class RecordingWriter:
    def __init__(self):
        self.writes = []

    def write(self, participants):
        self.writes.append(list(participants))


class ScriptedMotion:
    def __init__(self, x=0.0, y=0.0):
        self.state = MotionState(x=x, y=y)

    def get_data(self):
        return self.state


class FailingWriter:
    def write(self, participants):
        raise IOError("sink unavailable")


class FailingFeed(ScriptedFeed):
    def get_next(self):
        raise RuntimeError("feed disconnected")


class FailingTimer(ScriptedTimer):
    def get_data(self):
        raise RuntimeError("clock unavailable")


EGO_ID = 1


def participant(tracking_id, x, y=0.0, t=0.0, certainty=0.0):
    return Participant(tracking_id=tracking_id, center=(x, y, 0.0),
                       observation_time=t, existence_certainty=certainty)


class TestObjectDetectionModel:

    @pytest.fixture
    def setup_model(self):
        feed = ScriptedFeed()
        writer = RecordingWriter()
        timer = ScriptedTimer(0.0)
        params = SensorModelParams(detection_range=50.0, discard_age=5.0)
        motion = ScriptedMotion()
        model = ObjectDetectionModel(feed, writer, timer, params, motion, EGO_ID)
        return model, feed, writer, timer, motion

    def test_construction_is_passive(self, setup_model):
        model, feed, writer, timer, motion = setup_model
        assert model.latest_data == {}
        assert writer.writes == []

    def test_reference_scenario(self, setup_model):
        """
        Scenario: Ego at origin, range 50m, discard age 5s.
        Participant 7 reported once at t=0, then silent.
        Expected: detected at t=0 and t=4, gone at t=6, out of range update ignored.
        """
        model, feed, writer, timer, motion = setup_model

        feed.push(participant(7, 10.0, t=0.0))
        model.run()
        assert [p.tracking_id for p in writer.writes[-1]] == [7]
        assert writer.writes[-1][0].existence_certainty == 100.0

        timer.time = 4.0
        model.run()
        assert [p.tracking_id for p in writer.writes[-1]] == [7]
        assert writer.writes[-1][0].existence_certainty == 100.0

        timer.time = 6.0
        model.run()
        assert writer.writes[-1] == []
        assert 7 in model.latest_data

        stored = model.latest_data[7]
        feed.push(participant(7, 500.0, t=6.0))
        model.run()
        assert writer.writes[-1] == []
        assert model.latest_data[7] == stored
        assert len(writer.writes) == 4

    def test_self_detection_ignored(self, setup_model):
        """
        Scenario: The ego vehicle's own broadcast arrives on the feed.
        Expected: Table unchanged, ego not reported.
        """
        model, feed, writer, timer, motion = setup_model

        feed.push(participant(EGO_ID, 0.0))
        model.run()

        assert model.latest_data == {}
        assert writer.writes[-1] == []

    def test_range_boundary(self, setup_model):
        """
        Scenario: One participant exactly at range, one just inside.
        Expected: Only the one strictly inside range is detected.
        """
        model, feed, writer, timer, motion = setup_model

        feed.push(participant(10, 30.0, y=40.0), participant(11, 49.999))
        model.run()

        assert 10 not in model.latest_data
        assert 11 in model.latest_data
        assert {p.tracking_id for p in writer.writes[-1]} == {11}

    def test_range_relative_to_moving_ego(self, setup_model):
        model, feed, writer, timer, motion = setup_model

        motion.state = MotionState(x=1000.0, y=-200.0)
        feed.push(participant(3, 1020.0, y=-200.0), participant(4, 20.0))
        model.run()

        assert set(model.latest_data) == {3}
        assert model.ego_location == (1000.0, -200.0, 0.0)

    def test_latest_write_wins(self, setup_model):
        """
        Scenario: Three updates for the same participant in one cycle, the last out of range.
        Expected: One table entry equal to the last in-range update.
        """
        model, feed, writer, timer, motion = setup_model

        first = participant(5, 10.0, t=0.0)
        second = participant(5, 12.0, t=0.1)
        far = participant(5, 80.0, t=0.2)
        feed.push(first, second, far)
        model.run()

        assert len(model.latest_data) == 1
        assert model.latest_data[5] == second
        assert len(writer.writes[-1]) == 1
        assert writer.writes[-1][0].center == (12.0, 0.0, 0.0)

    def test_age_boundary(self, setup_model):
        """
        Scenario: Records exactly at and just below the discard age.
        Expected: Exactly-aged record excluded, younger one reported with certainty 100.
        """
        model, feed, writer, timer, motion = setup_model

        feed.push(participant(20, 10.0, t=0.0, certainty=40.0),
                  participant(21, 10.0, t=0.001, certainty=40.0))
        timer.time = 5.0
        model.run()

        output = writer.writes[-1]
        assert [p.tracking_id for p in output] == [21]
        assert output[0].existence_certainty == 100.0
        assert 20 in model.latest_data

    def test_emission_does_not_touch_stored_records(self, setup_model):
        model, feed, writer, timer, motion = setup_model

        feed.push(participant(8, 10.0, t=0.0, certainty=25.0))
        model.run()

        assert writer.writes[-1][0].existence_certainty == 100.0
        assert model.latest_data[8].existence_certainty == 25.0

    def test_no_clock_is_noop(self, setup_model):
        """
        Scenario: Simulation clock has not published yet.
        Expected: No table change, feed untouched, nothing written.
        """
        model, feed, writer, timer, motion = setup_model

        timer.time = None
        feed.push(participant(7, 10.0))
        model.run()

        assert model.latest_data == {}
        assert writer.writes == []
        assert feed.has_next()

    def test_stale_record_overwritten_by_new_update(self, setup_model):
        """
        Scenario: A record ages out of the output, then the participant reappears.
        Expected: The retained record is replaced and reported again.
        """
        model, feed, writer, timer, motion = setup_model

        feed.push(participant(9, 10.0, t=0.0))
        model.run()
        timer.time = 20.0
        model.run()
        assert writer.writes[-1] == []
        assert model.latest_data[9].observation_time == 0.0

        feed.push(participant(9, 15.0, t=20.0))
        model.run()
        assert model.latest_data[9].observation_time == 20.0
        assert [p.center for p in writer.writes[-1]] == [(15.0, 0.0, 0.0)]

    def test_output_is_sorted_and_written_once_per_run(self, setup_model):
        model, feed, writer, timer, motion = setup_model

        feed.push(participant(30, 5.0), participant(2, 6.0), participant(17, 7.0))
        model.run()

        assert len(writer.writes) == 1
        assert [p.tracking_id for p in writer.writes[0]] == [2, 17, 30]

    def test_empty_cycle_still_publishes(self, setup_model):
        model, feed, writer, timer, motion = setup_model

        model.run()

        assert writer.writes == [[]]

    def test_parameter_changes_apply_next_cycle(self, setup_model):
        model, feed, writer, timer, motion = setup_model

        model.sensor_model.update({'detection_range': 5.0})
        feed.push(participant(12, 10.0))
        model.run()
        assert 12 not in model.latest_data

        model.sensor_model.update({'detection_range': 15.0})
        feed.push(participant(12, 10.0))
        model.run()
        assert 12 in model.latest_data

    def test_collaborator_errors_propagate(self, setup_model):
        model, feed, writer, timer, motion = setup_model

        model.participant_set_writer = FailingWriter()
        with pytest.raises(IOError):
            model.run()

    @pytest.mark.parametrize('failing', ['feed', 'timer'])
    def test_feed_and_clock_errors_propagate(self, setup_model, failing):
        """
        Scenario: The feed or the clock raises while the model runs.
        Expected: The error reaches the caller unchanged and nothing is written.
        """
        model, feed, writer, timer, motion = setup_model

        if failing == 'feed':
            model.participant_feed = FailingFeed()
            model.participant_feed.push(participant(7, 10.0))
        else:
            model.timer = FailingTimer(0.0)

        with pytest.raises(RuntimeError):
            model.run()
        assert writer.writes == []
        assert model.latest_data == {}


class TestDetectionHelpers:

    def test_update_detections_returns_new_table(self):
        table = {4: participant(4, 1.0)}
        updated = update_detections(table, [participant(6, 2.0)], (0.0, 0.0, 0.0), 10.0, EGO_ID)

        assert set(table) == {4}
        assert set(updated) == {4, 6}

    def test_update_detections_keeps_record_when_participant_leaves_range(self):
        inside = participant(4, 1.0, t=0.0)
        updated = update_detections({4: inside}, [participant(4, 11.0, t=1.0)],
                                    (0.0, 0.0, 0.0), 10.0, EGO_ID)

        assert updated[4] is inside

    def test_collect_detections_filters_by_age(self):
        table = {
            1: participant(1, 0.0, t=0.0),
            2: participant(2, 0.0, t=1.5),
        }

        detections = collect_detections(table, t_now=2.0, discard_age=1.0)

        assert [p.tracking_id for p in detections] == [2]
        assert table[2].existence_certainty == 0.0
