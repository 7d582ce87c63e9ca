"""Constants used across all test files."""

# Common test values
TEST_HOST = "127.0.0.1"
TEST_URL = "http://127.0.0.1:8080"
TEST_PRIMARY_PORT = 8080
TEST_SENTINEL = "Hello, World!"
TEST_WRONG_BODY = "Goodbye"
TEST_CANDIDATE_PORTS = (8080, 8000, 80, 3000, 3001, 8080, 8282)
TEST_TIMEOUT = 1.0

# Throughput scenarios
SCENARIO_TOTAL_REQUESTS = 5000
SCENARIO_A_ELAPSED = 4.0
SCENARIO_A_RPS = 1250.0
SCENARIO_B_ELAPSED = 6.0
THRESHOLD_RPS = 1000.0

# Dispatch sizing
SMALL_TOTAL_REQUESTS = 37
SMALL_CONCURRENCY = 5
REQUEST_DELAY_SEC = 0.005
