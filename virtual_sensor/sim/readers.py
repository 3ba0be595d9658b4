"""
Bus-backed readers and writers handed to sensor models.

Each one registers itself on the bus as a passive node and caches or
queues the messages it cares about, so the consuming model never talks
to the bus directly.
"""
import collections
from dataclasses import replace
from virtual_sensor.env.participant import MotionState, Participant


class BusNode:
    def __init__(self, name, bus):
        self.name = name
        self.bus = bus
        self.bus.register(self)

    def receive_message(self, msg_id, data, sender):
        """Callback for receiving messages. Override in subclasses."""
        pass


def as_number(value):
    """Numeric bus payload as float; bools and non-numbers raise TypeError."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return float(value)


class SimulationTimeReader(BusNode):
    """Latest simulation time seen on 'SIM_TIME'."""
    def __init__(self, name, bus):
        super().__init__(name, bus)
        self.time = None

    def receive_message(self, msg_id, data, sender):
        if msg_id != 'SIM_TIME':
            return
        try:
            self.time = as_number(data)
        except TypeError as e:
            print(f"[{self.name}] Dropped malformed simulation time from {sender}: {e}")

    def has_data(self):
        return self.time is not None

    def get_data(self):
        return self.time


class MotionStateReader(BusNode):
    """
    Tracks the motion state of a single vehicle from its telemetry.
    Only messages sent by `source` are considered. Malformed telemetry
    is dropped and the last good state kept.
    """
    def __init__(self, name, bus, source):
        super().__init__(name, bus)
        self.source = source
        self.state = MotionState()
        self.received = False

    def receive_message(self, msg_id, data, sender):
        if sender != self.source:
            return
        try:
            if msg_id == 'GPS_POS':
                x = as_number(data['x'])
                y = as_number(data['y'])
                t = as_number(data.get('time', self.state.time))
                self.state.x, self.state.y, self.state.time = x, y, t
                self.received = True
            elif msg_id == 'WHEEL_SPEED':
                self.state.v = as_number(data)
            elif msg_id == 'YAW':
                self.state.yaw = as_number(data)
        except (AttributeError, KeyError, TypeError) as e:
            print(f"[{self.name}] Dropped malformed {msg_id} from {sender}: {e}")

    def has_data(self):
        return self.received

    def get_data(self):
        return replace(self.state)


class ParticipantFeed(BusNode):
    """
    Queue of 'PARTICIPANT_STATE' broadcasts, drained with has_next()/get_next().
    """
    def __init__(self, name, bus, max_queued=1000):
        super().__init__(name, bus)
        self.queue = collections.deque(maxlen=max_queued)

    def receive_message(self, msg_id, data, sender):
        if msg_id != 'PARTICIPANT_STATE':
            return
        try:
            participant = Participant.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            print(f"[{self.name}] Dropped malformed participant state from {sender}: {e}")
            return
        if len(self.queue) == self.queue.maxlen:
            print(f"[{self.name}] Queue full, discarding oldest participant state")
        self.queue.append(participant)

    def has_next(self):
        return len(self.queue) > 0

    def get_next(self):
        return self.queue.popleft()


class ParticipantSetWriter(BusNode):
    """Publishes detection snapshots as 'PARTICIPANT_SET'."""
    def __init__(self, name, bus, sender):
        super().__init__(name, bus)
        self.sender = sender
        self.latest = []

    def write(self, participants):
        self.latest = list(participants)
        self.bus.broadcast('PARTICIPANT_SET', [p.to_dict() for p in self.latest], sender=self.sender)
