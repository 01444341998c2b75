"""
Games module - Rulesets built on the engine core.

Each ruleset has its own subpackage with:
- Map layout
- Factions, cost and income tables
- Cult board and scoring tiles
- A setup factory
"""
