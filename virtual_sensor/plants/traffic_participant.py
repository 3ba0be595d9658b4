"""
Traffic participant simulation.
"""
import math
from virtual_sensor.plants.base_plant import BasePlant

class TrafficParticipant(BasePlant):
    """
    Constant velocity traffic actor.
    Broadcasts its state at a fixed rate, like a V2X basic safety message.
    """
    def __init__(self, name, bus, tracking_id, x=0.0, y=0.0, vx=0.0, vy=0.0,
                 classification='car', broadcast_interval=0.1):
        super().__init__(name, bus)
        self.tracking_id = tracking_id
        self.classification = classification
        self.broadcast_interval = broadcast_interval # 10Hz
        self.time_since_last_broadcast = broadcast_interval
        self.state = {
            'x': x,
            'y': y,
            'vx': vx,
            'vy': vy
        }

    def update_physics(self, dt):
        self.state['x'] += self.state['vx'] * dt
        self.state['y'] += self.state['vy'] * dt
        self.time_since_last_broadcast += dt

    def publish_sensor_data(self):
        # Small tolerance absorbs float accumulation in the step counter
        if self.time_since_last_broadcast + 1e-9 < self.broadcast_interval:
            return
        self.time_since_last_broadcast = 0.0
        self.bus.broadcast('PARTICIPANT_STATE', {
            'tracking_id': self.tracking_id,
            'center': (self.state['x'], self.state['y'], 0.0),
            'observation_time': self.sim_time,
            'velocity': (self.state['vx'], self.state['vy']),
            'yaw': math.atan2(self.state['vy'], self.state['vx']),
            'classification': self.classification
        }, sender=self.name)
