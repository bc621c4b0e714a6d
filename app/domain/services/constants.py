# Fixed match scores per originating strategy (strategy tags, not similarities)
SCORE_CONTENT = 0.8
SCORE_COLLABORATIVE = 0.9
SCORE_TRENDING = 0.7
SCORE_NEW_ARRIVALS = 0.7
SCORE_BOUGHT_TOGETHER = 0.95

# Human-readable reasons attached to each item
REASON_CONTENT = "Similar to items you viewed in {category}"
REASON_COLLABORATIVE = "Users with similar taste also liked this"
REASON_TRENDING = "Trending now — Popular among shoppers"
REASON_NEW_ARRIVALS = "New arrivals"
REASON_BOUGHT_TOGETHER = "Frequently bought together"

# Recommendation algorithms (selector values on getRecommendations)
ALGO_CONTENT = "content-based"
ALGO_COLLABORATIVE = "collaborative"
ALGO_HYBRID = "hybrid"

# List of all supported algorithms (useful for validation or enums)
ALL_ALGORITHMS = {ALGO_CONTENT, ALGO_COLLABORATIVE, ALGO_HYBRID}
DEFAULT_ALGORITHM = ALGO_HYBRID
# Unknown selectors are served by the content-based engine
FALLBACK_ALGORITHM = ALGO_CONTENT
