
class BaseECU:
    """
    Control unit attached to the bus and stepped by the simulation engine
    after all plants have published.
    """
    def __init__(self, name, bus):
        self.name = name
        self.bus = bus
        self.bus.register(self)

    def receive_message(self, msg_id, data, sender):
        """Callback for receiving messages. Override in subclasses."""
        pass

    def step(self, dt):
        """Execute one time step of logic. Override in subclasses."""
        pass
