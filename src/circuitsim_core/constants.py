# src/circuitsim_core/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Network Idealisations ---

#: Resistance used for elements that conduct "perfectly" (closed switch, intact
#: fuse, inductor at DC). Kept finite so the conductance stays representable.
SHORT_CIRCUIT_RESISTANCE_OHMS: float = 0.01

#: Resistance used for elements that do not conduct (open switch, blown fuse,
#: broken lamp, capacitor at DC). Kept finite so floating nodes stay solvable.
OPEN_CIRCUIT_RESISTANCE_OHMS: float = 1.0e9

#: Lower clamp for any user-adjustable resistance (potentiometer wiper at 0 %).
MIN_RESISTANCE_OHMS: float = 0.01

#: Fixed linearised resistances for the forward-conduction region of
#: semiconductor junctions. Not an exponential diode law.
DIODE_LINEAR_RESISTANCE_OHMS: float = 100.0
LED_LINEAR_RESISTANCE_OHMS: float = 50.0

# --- Solver ---

#: Pivots with a magnitude below this value mark the system as singular.
#: Must stay well below 1 / OPEN_CIRCUIT_RESISTANCE_OHMS.
PIVOT_EPSILON: float = 1.0e-12

#: Matrix row index reserved for the ground node.
GROUND_SENTINEL: int = -1

# --- Thermal Model ---

AMBIENT_TEMPERATURE_C: float = 25.0
THERMAL_RESISTANCE_C_PER_W: float = 50.0
#: First-order relaxation rate of the potentiometer track temperature, 1/s.
THERMAL_RELAXATION_RATE: float = 2.0

# --- Protection Models ---

#: Accumulated heat, in (I / rating)^2 * seconds, at which a fuse blows.
FUSE_BLOW_THRESHOLD: float = 2.0
#: Rate at which accumulated fuse heat decays while within rating, per second.
FUSE_COOLING_RATE: float = 0.5

#: A lamp burns out once its power exceeds this multiple of the rated power.
LAMP_BURNOUT_FACTOR: float = 1.5
#: Upper bound of the reported lamp brightness (overdriven lamps glow > 1).
LAMP_MAX_BRIGHTNESS: float = 1.5

#: Potentiometer power beyond this multiple of its rating is critical.
POTENTIOMETER_CRITICAL_FACTOR: float = 10.0

#: Capacitor voltage below this value is reported as reverse polarity.
CAPACITOR_REVERSE_THRESHOLD_V: float = -1.0

#: Delivered current above which a voltage source reports a short circuit.
SOURCE_SHORT_CIRCUIT_CURRENT_A: float = 10.0

#: Battery EMF never sags below this fraction of its nominal voltage.
BATTERY_SAG_FLOOR: float = 0.7
#: Charge percentage under which a battery reports itself depleted.
BATTERY_DEPLETED_PERCENT: float = 5.0
SECONDS_PER_HOUR: float = 3600.0

#: Slopes of the piecewise-linear junction current models, A/V.
DIODE_FORWARD_SLOPE: float = 10.0
DIODE_BREAKDOWN_SLOPE: float = 0.1
LED_FORWARD_SLOPE: float = 0.01

# --- Simulation Run Defaults ---

DEFAULT_TIME_STEP_S: float = 1.0 / 60.0
MIN_TIME_STEP_S: float = 1.0e-3

logger.debug("Defined core constants for network idealisations, solver and protection models.")
