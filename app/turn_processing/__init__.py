"""Move processing helpers.

Move preconditions live here as an ordered pipeline so every front end
(terminal, HTTP, tests) is rejected for the same reason in the same order.
"""
