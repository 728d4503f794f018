"""Range monitor service for Osmosis concentrated-liquidity pools.

Poll each configured pool on its own timer, track its current tick, and send
a Telegram notification when the tick jumps to a new range or drifts within
the configured threshold of a range boundary.
"""
