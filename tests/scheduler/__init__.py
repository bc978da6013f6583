"""
Job Scheduler Test Suite.

- Job entity transitions and retry accounting
- Queue ordering, exclusive claims, re-admission and cancellation
- Executor dispatch, retry policy and the worker loop
"""
