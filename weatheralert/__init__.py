"""
Weather Alert Service.

Architecture:
    weatheralert/
    ├── alerting/        # Threshold store, rule evaluation, status summaries
    ├── services/        # Weather API client, Redis publisher, cycle scheduler
    ├── config.py        # Pydantic settings (env / .env)
    ├── scheduler_main.py  # Publisher process entry point
    └── subscriber.py    # Channel listener that prints received messages

Data Flow:
    Scheduler tick → WeatherClient.fetch() → evaluate / summarize
    → RedisPublisher.publish(channel, message)

Channels:
    - weather_alerts   ← one message per triggered alert
    - weather_updates  ← one status summary per tick
"""

__version__ = "1.0.0"
