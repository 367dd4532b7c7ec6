"""
supplement_ranker.scoring: per-product evaluators.

All functions are pure: no I/O, no shared mutable state.  Policy constants
come in through the ``supplement_ranker.config`` sub-configs.

Modules:
  cost_model    : unit normalization, cost-per-mg, normalized cost, comparison.
  safety_checker: contraindication matcher + ranking-path safety score.
  safety_scorer : detailed, itemized standalone safety report.
  intake_limits : tolerable upper intake checks for the detailed report.
  safety_policy : RankingSafetyPolicy / DetailedSafetyPolicy strategies.
  effectiveness : goal-match effectiveness score.
  evidence      : evidence-level aggregation and grade.
  cost_score    : daily cost → score (absolute tariff or budget-relative).
"""
