"""
Scoring engine: turns normalized token data into an overall score, a risk
tier, a recommendation and a breakout probability with itemized signals.

Modules
-------
ratios     : InvalidInputError + guarded volume/supply ratios, market-cap
             tiers, unlock risk, half-up rounding.
narrative  : classify_narrative() — first-match-wins sector classifier.
scorer     : ScoreBreakdown + compute_score() + risk/recommendation rules.
breakout   : BreakoutResult + compute_breakout() — weighted signal engine.
engagement : assess_engagement() — social engagement sweet-spot check.
ranker     : rank_breakout_candidates() — breakout shortlist.
analyzer   : analyze_token() / analyze_snapshot() — composes all of the above.

Everything except ``analyzer`` is pure: no I/O, no logging, no config reads.
"""
