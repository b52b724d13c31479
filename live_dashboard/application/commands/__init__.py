from .command_dispatcher import CommandDispatcher

__all__ = ["CommandDispatcher"]
