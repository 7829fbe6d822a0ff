"""
Weather Alerting.

Components:
- schemas: Reading, alert and evaluation result models, channel names
- thresholds: Thread-safe store of user-defined per-condition thresholds
- engine: Fixed and custom rule evaluation, status summaries
"""
