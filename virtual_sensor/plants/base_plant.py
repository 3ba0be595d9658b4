from virtual_sensor.sim.readers import as_number

class BasePlant:
    def __init__(self, name, bus):
        self.name = name
        self.bus = bus
        self.bus.register(self)
        self.state = {}
        self.sim_time = 0.0

    def receive_message(self, msg_id, data, sender):
        """Callback for receiving messages. Extend in subclasses."""
        if msg_id == 'SIM_TIME':
            try:
                self.sim_time = as_number(data)
            except TypeError as e:
                print(f"[{self.name}] Dropped malformed simulation time from {sender}: {e}")

    def update_physics(self, dt):
        """Update the physical state of the plant. Override in subclasses."""
        pass

    def publish_sensor_data(self):
        """Publish sensor readings to the bus. Override in subclasses."""
        pass
