"""
Core Simulation Engine.
"""
from virtual_sensor.sim.bus import VirtualBus

class SimulationEngine:
    """
    Manages the simulation clock, plants, and ECUs.

    Every step advances the clock and broadcasts it as 'SIM_TIME' before
    any plant or ECU runs, so all nodes stamp and read the same time.
    """
    def __init__(self, time_step=0.1, start_time=0.0):
        self.dt = time_step
        self.time = start_time
        self.bus = VirtualBus()
        self.ecus = []
        self.plants = []
        self.running = False

    def add_ecu(self, ecu):
        """Add an ECU to the simulation."""
        self.ecus.append(ecu)

    def add_plant(self, plant):
        """Add a Plant model to the simulation."""
        self.plants.append(plant)

    def step(self):
        """Advance the simulation by one time step."""
        # 1. Clock
        self.time += self.dt
        self.bus.broadcast('SIM_TIME', self.time, sender='SimulationEngine')

        # 2. Physics (Plants)
        for plant in self.plants:
            plant.update_physics(self.dt)
            plant.publish_sensor_data()

        # 3. Logic (ECUs)
        for ecu in self.ecus:
            ecu.step(self.dt)

    def run(self, duration):
        """Run the simulation for a specific duration in seconds."""
        self.running = True
        steps = int(round(duration / self.dt))
        print(f"Starting simulation for {duration}s ({steps} steps)...")

        for _ in range(steps):
            if not self.running:
                break
            self.step()

        self.running = False
        print("Simulation complete.")

    def stop(self):
        self.running = False
