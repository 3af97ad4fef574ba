"""
Timeout Harness
===============
Measures three client-side ways of bounding an outbound HTTP request and
flags runs where a bound that should have held did not.

Strategies (run in this order):
  unbounded:           plain request, no deadline (baseline)
  cooperative_cancel:  timer aborts the request through a cancellation token
  race:                request raced against a timer, loser left running
"""

__version__ = "1.0.0"
