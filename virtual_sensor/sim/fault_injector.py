
class FaultInjector:
    """
    Drops or corrupts bus traffic to starve nodes of messages.
    """
    def __init__(self):
        self.active_faults = []

    def inject(self, fault_type, target_id='ALL'):
        """
        fault_type: 'DROP' or 'CORRUPT'
        target_id: Message ID to target, 'ALL' for every message
        """
        if fault_type not in ('DROP', 'CORRUPT'):
            raise ValueError(f"Unknown fault type: {fault_type}")
        self.active_faults.append({'type': fault_type, 'target': target_id})
        print(f"INJECTING FAULT: {fault_type} on {target_id}")

    def clear(self, target_id=None):
        """Remove faults on `target_id`, or all faults when None."""
        if target_id is None:
            self.active_faults = []
        else:
            self.active_faults = [f for f in self.active_faults if f['target'] != target_id]
        print(f"FAULTS CLEARED: {target_id or 'ALL'}")

    def process(self, msg_id, data, sender):
        drop = False
        for fault in self.active_faults:
            if fault['target'] == msg_id or fault['target'] == 'ALL':
                if fault['type'] == 'DROP':
                    drop = True
                elif fault['type'] == 'CORRUPT':
                    data = "CORRUPTED_DATA"
        return msg_id, data, drop
