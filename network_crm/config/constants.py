"""
Application Constants

This module contains the magic strings and numbers used throughout the application.
Centralizing constants makes the codebase more maintainable and easier to update.
"""

# ============================================================================
# Contact Constants
# ============================================================================

MIN_RELATIONSHIP_STRENGTH = 1
MAX_RELATIONSHIP_STRENGTH = 5
DEFAULT_RELATIONSHIP_STRENGTH = 1

# ============================================================================
# Analytics Constants
# ============================================================================

# Contacts at or above this strength count as strong connections
STRONG_CONNECTION_THRESHOLD = 4

# A contact with no interaction in this window is dormant
DORMANT_AFTER_DAYS = 30

# Window for the "recent interactions" counter
RECENT_INTERACTION_DAYS = 7

DEFAULT_DORMANT_LIMIT = 20

# ============================================================================
# Network Graph Constants
# ============================================================================

DEFAULT_GRAPH_CATEGORY = "other"
DEFAULT_LINK_TYPE = "connected"

# ============================================================================
# Search Constants
# ============================================================================

MAX_SEARCH_QUERY_LENGTH = 100

# Search-as-you-type callers skip shorter queries
CLIENT_MIN_SEARCH_LENGTH = 3

# ============================================================================
# Database Constants
# ============================================================================

# Pagination
DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 200

# ============================================================================
# Tag Constants
# ============================================================================

DEFAULT_TAG_COLOR = "#3B82F6"

# ============================================================================
# Validation Constants
# ============================================================================

# Contact field lengths (should match database schema)
MAX_NAME_LENGTH = 255
MAX_COMPANY_LENGTH = 255
MAX_TITLE_LENGTH = 255
MAX_PHONE_LENGTH = 50
MAX_EMAIL_LENGTH = 255
MAX_LOCATION_LENGTH = 255
MAX_LINKEDIN_URL_LENGTH = 500
MAX_CATEGORY_LENGTH = 50
MAX_SUBJECT_LENGTH = 255
MAX_TAG_NAME_LENGTH = 100

# ============================================================================
# Client Constants
# ============================================================================

CLIENT_TIMEOUT_SECONDS = 20
