"""Constants for masterylog."""

# Performance score range
SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Recency decay (shared with the history retention window)
HALF_LIFE_DAYS = 90.0
SECONDS_PER_DAY = 86400

# Evaluation tier scores
TIER_STRONG = "strong"
TIER_MODERATE = "moderate"
TIER_WEAK = "weak"

TIER_SCORES = {
    TIER_STRONG: 100.0,
    TIER_MODERATE: 60.0,
    TIER_WEAK: 20.0,
}

# Scores used when only a correct/incorrect outcome is known
CORRECT_SCORE = 100.0
INCORRECT_SCORE = 0.0

# Mastery level thresholds (closed, evaluated top-down)
LEVEL_THRESHOLD_CONFIDENT = 90.0
LEVEL_THRESHOLD_SOLID = 75.0
LEVEL_THRESHOLD_AVERAGE = 50.0
LEVEL_THRESHOLD_NEEDS_REVIEW = 30.0

# Related topic drill-down
RELATED_DEFAULT_LIMIT = 5

# Event store batching
DELETE_BATCH_SIZE = 500

# Result error codes
ERROR_CODE_VALIDATION = "validation"
ERROR_CODE_STORE_UNAVAILABLE = "store_unavailable"
ERROR_CODE_NOT_SIGNED_IN = "not_signed_in"

# Error messages
ERROR_EMPTY_TOPICS = "At least one topic is required for an evaluation."
ERROR_BLANK_TOPIC = "Topic identifier must not be blank."
ERROR_TOPICS_NOT_LIST = "Topics must be given as a list of topic identifiers."
ERROR_NO_SCORE = "Provide a performance score, an evaluation tier, or a correct/incorrect outcome."
ERROR_SCORE_RANGE = "Performance score must be between 0 and 100."
ERROR_STORE = "The evaluation store is unavailable. Please try again."
ERROR_NOT_SIGNED_IN = "No user is signed in."
