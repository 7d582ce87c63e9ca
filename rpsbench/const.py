"""Constants for the rpsbench load-testing harness."""
import os

# Default configuration values
DEFAULT_URL = "http://localhost:8080"
DEFAULT_DURATION_SEC = 30
DEFAULT_CONNECTIONS = 100
DEFAULT_THREADS = os.cpu_count() or 4
DEFAULT_DISPATCH_STRATEGY = "auto"
CONFIG_FILE_NAME = "rpsbench.json"
ENV_PREFIX = "RPSBENCH_"

# Target discovery
# Scanned in order; the duplicate 8080 is a redundant re-check
DEFAULT_CANDIDATE_PORTS = [8080, 8000, 80, 3000, 3001, 8080, 8282]
SENTINEL_BODY = "Hello, World!"
PROBE_TIMEOUT_SEC = 1.0
ROOT_PATH = "/"

# Load generation
DEFAULT_TOTAL_REQUESTS = 5000
DEFAULT_WARMUP_REQUESTS = 10
REQUEST_TIMEOUT_SEC = 5.0
THROUGHPUT_THRESHOLD_RPS = 1000.0
MIN_ELAPSED_SEC = 1e-9

# Dispatch strategy names
STRATEGY_AUTO = "auto"
STRATEGY_POOL = "pool"
STRATEGY_BATCH = "batch"

# Logging configuration
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library log levels
LIBRARY_LOG_LEVELS = {
    "urllib3": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING"
}

# Process exit codes
EXIT_OK = 0
EXIT_FATAL = 1

# Reporting
SERVER_START_HINT = "Start the target server so that GET / answers with the sentinel body"
