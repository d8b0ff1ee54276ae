"""
Configuration module for the Quantum Distribution Analyzer.

Centralizes the upstream simulation endpoint, request settings,
analysis constants, and logging settings.
"""

# ---------------------------------------------------------------------------
# Upstream quantum simulation service
# ---------------------------------------------------------------------------
QUANTUM_API_URL: str = "https://schrodice40.com/api/quantum"

# Number of measurement shots requested per simulation run
DEFAULT_SHOTS: int = 65536

REQUEST_TIMEOUT: int = 30  # seconds

# ---------------------------------------------------------------------------
# Analysis constants
# ---------------------------------------------------------------------------
# States above this probability (0.1%) count as significant
SIGNIFICANCE_THRESHOLD: float = 0.001

# Number of highest-probability states reported as dominant
DOMINANT_STATE_LIMIT: int = 10

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL: str = "INFO"

LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
