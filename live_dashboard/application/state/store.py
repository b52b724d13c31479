"""
Dashboard state store.

Single owner of DashboardState. Actions are applied one at a time through
``dispatch``; listeners are notified after every state-changing action with
the new state, the previous state and the action that produced it.
"""
import logging
from typing import Callable, List, Optional

from .actions import Action
from .reducer import reduce
from ...core.exceptions import ReentrantDispatchError
from ...domain.models.dashboard_state import DashboardState, initial_dashboard_state

logger = logging.getLogger(__name__)

StateListener = Callable[[DashboardState, DashboardState, Action], None]


class DashboardStore:
    """
    Serializes state transitions.

    All producers (live channel, poller, loaders, commands) run on a single
    event loop, so dispatch is synchronous and never interleaves. Dispatching
    from inside a listener is rejected with ReentrantDispatchError; the error is
    logged and the remaining listeners are still notified. Listeners that need
    to react with a new action should schedule it instead.
    """

    def __init__(
        self,
        initial_state: Optional[DashboardState] = None,
        record_actions: bool = False,
    ):
        self._state = initial_state or initial_dashboard_state()
        self._listeners: List[StateListener] = []
        self._dispatching = False
        self._closed = False
        self._action_log: Optional[List[Action]] = [] if record_actions else None

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def action_log(self) -> List[Action]:
        """Actions applied so far (empty unless the store records actions)."""
        return list(self._action_log or [])

    def dispatch(self, action: Action) -> DashboardState:
        """
        Apply ``action`` and notify listeners if the state changed.

        Returns:
            The state after the action was applied

        Raises:
            ReentrantDispatchError: If called while another dispatch runs
        """
        if self._closed:
            logger.warning(f"Store is closed; ignoring {action.name}")
            return self._state
        if self._dispatching:
            raise ReentrantDispatchError(action.name)

        self._dispatching = True
        try:
            old_state = self._state
            try:
                new_state = reduce(old_state, action)
            except Exception as e:
                logger.error(f"Failed to apply {action.name}: {e}", exc_info=True)
                return old_state

            if self._action_log is not None:
                self._action_log.append(action)
            if new_state is old_state:
                return old_state

            self._state = new_state
            self._notify(new_state, old_state, action)
            return new_state
        finally:
            self._dispatching = False

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def close(self) -> None:
        """Drop all listeners and stop accepting actions."""
        self._closed = True
        self._listeners.clear()

    def _notify(self, new_state: DashboardState, old_state: DashboardState, action: Action) -> None:
        for listener in list(self._listeners):
            try:
                listener(new_state, old_state, action)
            except ReentrantDispatchError as e:
                # The nested action is dropped; the applied one stands
                logger.error(f"State listener dispatched during {action.name}: {e.message}")
            except Exception as e:
                logger.error(f"State listener failed after {action.name}: {e}", exc_info=True)
