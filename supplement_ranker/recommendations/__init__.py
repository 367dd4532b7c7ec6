"""
Recommendation engine: aggregates the four per-product scores into ranked
recommendations with human-readable reasons and warnings.

Modules
-------
aggregator    : weight table lookup, overall score, letter grade,
                recommendation level + evaluate_product().
ranker        : recommend_product() + score_products() + rank_scored_products()
                + recommend_products() + top_recommendations(): ordering
                and rank assignment.
justification : build_reasons() + build_warnings() + build_boost_reason(): text only.
detailed      : detailed-assessment boosts + recommend_products_detailed().
reporter      : recommendation_to_dict() + JSON/CSV file output.
"""
