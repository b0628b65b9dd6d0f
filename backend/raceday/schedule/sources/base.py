import threading
from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseSource(ABC):
    @abstractmethod
    def fetch(self, cancel: Optional[threading.Event] = None) -> Any:
        """
        Retrieve the raw feed payload (decoded JSON). Raise on failure or cancellation.
        """
        raise NotImplementedError
