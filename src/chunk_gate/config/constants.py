"""Fixed constants of the three-stage assessment algorithm."""

# Stage weights for the final score
INITIAL_STAGE_WEIGHT = 0.4
REFLECTION_STAGE_WEIGHT = 0.3
CRITIC_STAGE_WEIGHT = 0.3

# Neutral score used when no signal is available
NEUTRAL_SCORE = 0.5

# Stage 1 factor multipliers (factor contribution = raw score * multiplier)
DENSITY_FACTOR_MULTIPLIER = 0.5
STRUCTURE_FACTOR_MULTIPLIER = 0.3
LLM_FACTOR_MULTIPLIER = 0.8
TOPIC_RELEVANCE_BOOST = 1.2

# Stage 2: self-reflection
BIAS_CONCENTRATION_THRESHOLD = 0.7
BIAS_PENALTY_SCALE = 0.5
COMPLETENESS_THRESHOLD = 0.7
COMPLETENESS_PENALTY_SCALE = 0.5
ALTERNATIVE_LOW_RELEVANCE = 0.2
ALTERNATIVE_FLOOR = 0.3
ALTERNATIVE_MIN_DIVERGENCE = 0.2
ALTERNATIVE_SCALE = 0.3

# Stage 3: critic validation
CONSISTENCY_THRESHOLD = 0.8
CONSISTENCY_PENALTY_SCALE = 0.3
PATTERN_SCALE = 0.5
MIN_CONTENT_LENGTH = 50
PATTERN_MIN_LENGTH = 100
PATTERN_MAX_LENGTH = 2000
MAX_NEWLINE_RATIO = 0.05
NUMERIC_WORD_RATIO = 0.8
REPETITION_MIN_WORDS = 10
MIN_UNIQUE_WORD_RATIO = 0.3

# Confidence weights
CONF_CONSISTENCY_WEIGHT = 0.5
CONF_DIVERSITY_WEIGHT = 0.3
CONF_EXTREMITY_WEIGHT = 0.2
CONF_FULL_DIVERSITY_FACTORS = 10
LOW_CONFIDENCE_THRESHOLD = 0.5

# Suggestions
LOW_FINAL_SCORE = 0.5
LOW_DENSITY_CONTRIBUTION = 0.3
EDGE_CASE_CONTRIBUTION = -0.1

# Relevance probe
PROBE_PREVIEW_CHARS = 500
PROBE_MAX_TOKENS = 16

# Heuristic pre-screen
MIN_SUMMARIZATION_LENGTH = 500
MIN_KEYWORD_DENSITY = 0.3
