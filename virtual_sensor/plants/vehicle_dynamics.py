"""
Ego vehicle dynamics model.
"""
import math
from virtual_sensor.plants.base_plant import BasePlant

class VehicleDynamics(BasePlant):
    """
    Simulates longitudinal and lateral vehicle motion using a kinematic bicycle model.
    The vehicle also broadcasts its own participant state, like every other actor.
    """
    def __init__(self, name, bus, tracking_id):
        super().__init__(name, bus)
        self.tracking_id = tracking_id
        # State: [x, y, yaw, velocity]
        self.state = {
            'x': 0.0,
            'y': 0.0,
            'yaw': 0.0,
            'v': 0.0
        }
        # Inputs
        self.steering_angle = 0.0
        self.throttle = 0.0
        self.brake = 0.0
        # Parameters
        self.wheelbase = 2.5 # meters
        self.mass = 1500.0 # kg
        self.max_drive_force = 3000.0 # N
        self.max_brake_force = 16000.0 # N

    def receive_message(self, msg_id, data, sender):
        """Handle incoming actuator commands."""
        if msg_id == 'STEERING_CMD':
            self.steering_angle = data
        elif msg_id == 'ACCEL_CMD':
            self.throttle = data
        elif msg_id == 'BRAKE_CMD':
            self.brake = data
        else:
            super().receive_message(msg_id, data, sender)

    def update_physics(self, dt):
        """Update vehicle state using kinematic bicycle model equations."""
        v = self.state['v']
        yaw = self.state['yaw']

        accel = (self.throttle * self.max_drive_force - self.brake * self.max_brake_force) / self.mass

        self.state['x'] += v * math.cos(yaw) * dt
        self.state['y'] += v * math.sin(yaw) * dt
        self.state['yaw'] += v / self.wheelbase * math.tan(self.steering_angle) * dt

        new_v = v + accel * dt
        # Clamp at zero if we cross it (braking/acceleration limit)
        if (v > 0 and new_v < 0) or (v < 0 and new_v > 0):
            new_v = 0.0
        self.state['v'] = new_v

    def publish_sensor_data(self):
        """Broadcast telemetry and the vehicle's own participant state."""
        self.bus.broadcast('WHEEL_SPEED', self.state['v'], sender=self.name)
        self.bus.broadcast('YAW', self.state['yaw'], sender=self.name)
        self.bus.broadcast('GPS_POS', {'x': self.state['x'], 'y': self.state['y'], 'time': self.sim_time}, sender=self.name)
        self.bus.broadcast('PARTICIPANT_STATE', {
            'tracking_id': self.tracking_id,
            'center': (self.state['x'], self.state['y'], 0.0),
            'observation_time': self.sim_time,
            'velocity': (self.state['v'] * math.cos(self.state['yaw']),
                         self.state['v'] * math.sin(self.state['yaw'])),
            'yaw': self.state['yaw'],
            'classification': 'car'
        }, sender=self.name)
