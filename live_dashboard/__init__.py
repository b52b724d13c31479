"""
Live Dashboard: real-time dashboard synchronization engine.

This package keeps a local, versioned view of a camera detection platform
(cameras, detections, alerts, performance) consistent with the remote
backend over a live event channel with poll fallback, and routes operator
commands back into that view.
"""

__version__ = "1.0.0"
