"""Default tuning values for the layout algorithms.

Each algorithm copies these into mutable instance attributes, so a driver
or tuning UI can change them per instance. Values scaled by graph size are
given as the factor that multiplies sqrt(|V|) or |V|.
"""

# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
ITERATIONS_PER_NODE: int = 10
"""Step budget of the force simulators, per node."""

MIN_DISTANCE: float = 1e-6
"""Separation applied to coincident nodes before evaluating a force law."""

# ---------------------------------------------------------------------------
# Eades spring embedder
# ---------------------------------------------------------------------------
EADES_DAMPENING: float = 0.15
"""Spring constant applied to the deviation from the rest length."""

EADES_SPRING_LENGTH: float = 100.0
"""Rest length of the spring on every edge."""

EADES_CHARGE: float = 150.0
"""Charge of every node; repulsion is charge**2 / d**2."""

EADES_MAX_FORCE_SCALE: float = 100.0
"""Per-step force cap, times sqrt(|V|)."""

# ---------------------------------------------------------------------------
# Fruchterman-Reingold
# ---------------------------------------------------------------------------
FR_K: float = 150.0
"""Ideal pairwise distance constant."""

FR_TEMPERATURE_SCALE: float = 250.0
"""Initial temperature (force cap), times sqrt(|V|)."""

FR_MIN_TEMPERATURE_SCALE: float = 1.0
"""Temperature floor, times sqrt(|V|)."""

FR_COOLING: float = 0.95
"""Factor applied to the temperature after every step."""

# ---------------------------------------------------------------------------
# Kamada-Kawai
# ---------------------------------------------------------------------------
KK_ENERGY_THRESHOLD: float = 1e-5
"""Layout is finished once the highest node energy drops to this."""

KK_STABLE_THRESHOLD: float = 1e-7
"""Maximum change of the highest energy between steps counted as a plateau."""

KK_STABLE_COUNT_THRESHOLD: int = 5
"""Consecutive plateau steps after which the layout gives up."""

KK_MAX_VERTEX_ITERS: int = 10
"""Newton steps spent on one node per step."""

# ---------------------------------------------------------------------------
# Harel-Koren multiscale
# ---------------------------------------------------------------------------
HK_MIN_GRANULARITY: int = 10
"""Supernodes in the first (coarsest) phase, capped at |V|."""

HK_LOCAL_RADIUS: float = 7.0
"""Neighborhood radius multiplier."""

HK_ITERATIONS: int = 5
"""Relaxations per supernode in each phase."""

HK_COARSE_RATE: float = 3.0
"""Growth factor of the supernode count between phases."""

HK_NOISE: float = 0.1
"""Width of the jitter added when nodes are placed on their center."""

# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------
DEFAULT_MAX_STEPS: int = 1000
"""Step budget used by the command line when none is given."""
