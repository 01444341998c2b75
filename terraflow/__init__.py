"""
Terraflow - Turn Engine for a Territory-Settlement Board Game

A deterministic, rules-driven engine that resolves player actions
(terraforming, building, upgrading, track improvements, cult advances,
passing) against an in-memory game session. The engine provides:
- Validate-then-commit action resolution with stable outcome codes
- Turn and round bookkeeping (setup phase, six rounds, terminal state)
- A facade that renders outcomes as status text
- An HTTP API and a CLI on top of the facade
"""

__version__ = "0.1.0"
