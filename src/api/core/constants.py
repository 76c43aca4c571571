API_VERSION_HEADER = "X-Marketplace-Version"

# Authentication headers
WALLET_ADDRESS_HEADER = "X-Wallet-Address"
AGENT_API_KEY_HEADER = "X-API-Key"

# 0x-prefixed 20-byte account address
WALLET_ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
BUDGET_PATTERN = r"^\d+$"

# Distance calculations
EARTH_RADIUS_METERS = 6_371_000

# Coverage
MAX_COVERAGE_AREAS = 3
MAX_COVERAGE_RADIUS_METERS = 50_000

# Pagination
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Ratings
MIN_RATING = 1
MAX_RATING = 5

# Bid timeline (days)
MIN_TIMELINE_DAYS = 1
MAX_TIMELINE_DAYS = 365

# Field limits
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 5000
MAX_COMMENT_LENGTH = 1000
MAX_DRONE_MODEL_LENGTH = 200
MAX_SPECIALIZATION_LENGTH = 500
MAX_BIO_LENGTH = 2000

# Escrow contract events and the argument carrying the domain ID
REQUEST_CREATED_EVENT = "RequestCreated"
REQUEST_CREATED_ID_FIELD = "requestId"
BID_SUBMITTED_EVENT = "BidSubmitted"
BID_SUBMITTED_ID_FIELD = "bidId"

# Paths excluded from request logging
SKIP_LOGGING_PATHS = {
    "/health",
    "/health/liveness",
}
