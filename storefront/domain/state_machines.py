"""State machine for catalog write transactions.

Each write call owns exactly one transaction end to end. The coordinator
drives it through these states and refuses anything else, so a
transaction can never be committed twice or committed after a rollback.
"""

from enum import Enum

from storefront.domain.exceptions import InvalidStateTransitionError


class TransactionState(str, Enum):
    """Transaction lifecycle states.

    State diagram:
        IDLE
          │
          │ begin
          ▼
        OPEN ──────────────┐
          │                │
          │ commit         │ rollback
          ▼                ▼
        COMMITTED      ROLLED_BACK
          │                │
          │ release        │ release
          ▼                ▼
        IDLE ◄─────────────┘
    """

    IDLE = "idle"
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"

    def can_transition_to(self, target: "TransactionState") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _TRANSACTION_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["TransactionState"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return sorted(_TRANSACTION_TRANSITIONS.get(self, set()), key=lambda s: s.value)

    def is_finished(self) -> bool:
        """Check if the transaction has reached an outcome."""
        return self in {TransactionState.COMMITTED, TransactionState.ROLLED_BACK}

    def transition_to(self, target: "TransactionState") -> "TransactionState":
        """Validate and return the target state.

        Args:
            target: Target state.

        Returns:
            The target state.

        Raises:
            InvalidStateTransitionError: If transition is not valid.
        """
        if not self.can_transition_to(target):
            raise InvalidStateTransitionError(
                current_state=self.value,
                target_state=target.value,
                allowed_transitions=[s.value for s in self.allowed_transitions()],
            )
        return target


_TRANSACTION_TRANSITIONS: dict[TransactionState, set[TransactionState]] = {
    TransactionState.IDLE: {TransactionState.OPEN},
    TransactionState.OPEN: {TransactionState.COMMITTED, TransactionState.ROLLED_BACK},
    TransactionState.COMMITTED: {TransactionState.IDLE},
    TransactionState.ROLLED_BACK: {TransactionState.IDLE},
}
