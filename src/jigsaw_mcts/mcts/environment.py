"""Decision environment contract for the search engine.

The engine never looks inside a game. It only needs four questions
answered (finished? / legal moves / apply / evaluate) plus a way to
duplicate a position. Games satisfy this structurally.
"""

from typing import Hashable, List, Protocol, runtime_checkable


@runtime_checkable
class Environment(Protocol):
    """Capability set a game state must provide.

    Attributes are not required; only these methods are.

    Rewards returned by ``eval`` are used verbatim: the search is
    cooperative, so any adversarial structure must be folded into the
    value by the environment itself.
    """

    def has_finished(self) -> bool:
        """True if no further action can be taken."""
        ...

    def legal_actions(self) -> List[Hashable]:
        """Legal actions in expansion order. Non-empty while unfinished."""
        ...

    def perform_action(self, action: Hashable) -> None:
        """Apply ``action`` in place. Raises ValueError if illegal."""
        ...

    def eval(self) -> int:
        """Signed reward of the current position."""
        ...

    def copy(self) -> "Environment":
        """Independent duplicate of this state."""
        ...
