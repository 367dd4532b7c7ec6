"""
Fixed vocabularies shared by models, scoring and reporting.

Modules
-------
contraindication_taxonomy : ContraindicationTag + AlertSeverity + RiskLevel,
                            labels and the default severity map.
goal_taxonomy             : HealthGoal + Priority + EvidenceLevel + grades and
                            recommendation levels.
lifestyle_taxonomy        : detailed-assessment answers (age group, exercise,
                            stress, sleep, alcohol, main concern).
"""
