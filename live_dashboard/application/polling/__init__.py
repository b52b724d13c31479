from .poll_scheduler import FallbackPollScheduler, should_poll

__all__ = ["FallbackPollScheduler", "should_poll"]
