
import collections

class VirtualBus:
    """
    Simulates the simulation-wide message network over which traffic
    participants broadcast their state and sensors publish detections.
    """
    def __init__(self, log_size=1000):
        self.nodes = []
        self.message_log = collections.deque(maxlen=log_size)
        self.fault_injector = None

    def register(self, node):
        """Register a node (ECU, Plant or reader) to the bus."""
        self.nodes.append(node)
        print(f"Node registered: {node.name}")

    def set_fault_injector(self, injector):
        """Attach a FaultInjector to the bus."""
        self.fault_injector = injector

    def broadcast(self, msg_id, data, sender):
        """Broadcasts a message to all registered nodes except the sender."""
        if self.fault_injector:
            msg_id, data, drop = self.fault_injector.process(msg_id, data, sender)
            if drop:
                return

        self.message_log.append({'id': msg_id, 'data': data, 'sender': sender})
        for node in self.nodes:
            if node.name != sender:
                node.receive_message(msg_id, data, sender)

    def get_log(self, msg_id=None):
        """Return the logged messages, optionally only those with `msg_id`."""
        if msg_id is None:
            return list(self.message_log)
        return [msg for msg in self.message_log if msg['id'] == msg_id]
