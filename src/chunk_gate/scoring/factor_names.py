"""Names of the assessment factors emitted by each stage."""


class FactorName:
    # Stage 1
    CONTENT_RELEVANCE = "Content Relevance"
    INFORMATION_DENSITY = "Information Density"
    STRUCTURAL_IMPORTANCE = "Structural Importance"
    LLM_ASSESSMENT = "LLM Assessment"

    # Stage 2
    BIAS_CORRECTION = "Bias Correction"
    COMPLETENESS_ADJUSTMENT = "Completeness Adjustment"
    ALTERNATIVE_PERSPECTIVE = "Alternative Perspective"

    # Stage 3
    CONSISTENCY_ISSUE = "Consistency Issue"
    PATTERN_VALIDATION = "Pattern Validation"
    EDGE_CASE_DETECTION = "Edge Case Detection"
