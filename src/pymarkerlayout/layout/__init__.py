"""Layout pipeline stages.

Each update runs acquisition/selection, grouping, then placement, and
hands the accepted markers to the diff state.  Only the diff state
outlives a single update.
"""
