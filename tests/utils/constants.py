AGENT_API_KEY = "test-agent-key"
BASE_URL = "http://test-marketplace-api"

CONSUMER_ADDRESS = "0x" + "1" * 40
PROVIDER_ADDRESS = "0x" + "2" * 40
OTHER_ADDRESS = "0x" + "3" * 40

# Reconciler clock in tests; synthetic IDs come out as 1700000000123
SYNTHETIC_CLOCK_SECONDS = 1_700_000_000.123
SYNTHETIC_ID = 1_700_000_000_123
