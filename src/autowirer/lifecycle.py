from __future__ import annotations

from abc import ABC, abstractmethod


class Initializable(ABC):
    """Capability for singletons that finish their setup after wiring.

    ``initialize`` runs once per ``AutoWirer.wire`` call, after every
    registered singleton exists, in construction order.
    """

    @abstractmethod
    def initialize(self) -> None: ...


class Cleanable(ABC):
    """Capability for singletons that release resources on teardown.

    ``cleanup`` runs once during ``AutoWirer.cleanup``, in reverse
    construction order.
    """

    @abstractmethod
    def cleanup(self) -> None: ...
